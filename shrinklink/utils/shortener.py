"""Shortcode generation utility

Functions:
    generate_shortcode(length=7, alphabet=ShortCode.ALPHABET):
        Generate a uniformly random string suitable for use as a URL slug.

Example:
    >>> from shrinklink.utils import generate_shortcode
    >>> generate_shortcode()
    'q_8ZtA-'
"""

import secrets

from shrinklink.constants import ShortCode


def generate_shortcode(length: int = ShortCode.DEFAULT_LENGTH, alphabet: str = ShortCode.ALPHABET) -> str:
    """Generate a random shortcode.

    Every character is drawn independently and uniformly from `alphabet`
    with the operating system's CSPRNG, so codes are not guessable from
    previously issued ones.

    NOTE:
        - Uniqueness is NOT guaranteed here. The caller reserves the code with
          the storage uniqueness constraint and retries on collision.
        - With the default 64-character alphabet a 7-character code has
          64**7 (about 4.4e12) possible values.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is out of bounds or the alphabet is empty.
    """
    if not isinstance(length, int):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if not ShortCode.MIN_LENGTH <= length <= ShortCode.MAX_LENGTH:
        raise ValueError(f'Length must be between {ShortCode.MIN_LENGTH} and {ShortCode.MAX_LENGTH} (given value: {length}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')

    return ''.join(secrets.choice(alphabet) for _ in range(length))
