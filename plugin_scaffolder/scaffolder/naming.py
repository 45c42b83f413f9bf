"""Name derivation for generated packages.

Every identifier the scaffolder writes -- folder names, file names, class
names, npm package names -- is derived from the operator's display name
through the functions in this module, so the same input always produces the
same tree.
"""

from __future__ import annotations

import re

# Any run of characters outside ``[a-z0-9]`` (after lower-casing) counts as
# one delimiter: whitespace, ``-``, ``_``, ``.``, ``/``, punctuation.
DELIMITER_PATTERN = re.compile(r"[^a-z0-9]+")

_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")


def normalize(
    text: str,
    delimiter: str = "-",
    pattern: re.Pattern[str] = DELIMITER_PATTERN,
) -> str:
    """Lower-case *text* and collapse every delimiter run into *delimiter*.

    Leading and trailing delimiters are removed.  As long as *delimiter* is
    itself matched by *pattern*, the function is idempotent.

    Examples::

        normalize("No HTTPS")        -> "no-https"
        normalize("  my__new.rule ") -> "my-new-rule"
        normalize("")                -> ""
    """
    slug = pattern.sub(delimiter, text.lower())
    return slug.strip(delimiter)


def to_pascal(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``.

    Only the first letter of each word is changed, so ``FetchEnd`` stays
    ``FetchEnd``.
    """
    return "".join(word[:1].upper() + word[1:] for word in _WORD_SPLIT.split(value) if word)


def to_camel(value: str) -> str:
    """Convert ``some-thing`` or ``SomeThing`` to ``someThing``."""
    pascal = to_pascal(value)
    return pascal[:1].lower() + pascal[1:]


def to_identifier(slug: str, prefix: str = "") -> str:
    """Pascal-case *slug*, prepending the pascal-cased *prefix* if given.

    ``to_identifier("is-valid", "typescript-config")`` -> ``"TypescriptConfigIsValid"``
    """
    return to_pascal(prefix) + to_pascal(slug)
