"""Mass correction tag lookup table."""

import logging
import os
import re
from typing import Dict, Iterator, Optional, Tuple

from ..constants import (
    DEFAULT_MASS_CORRECTION_TAGS,
    MASS_DIGITS_OF_PRECISION,
    MASS_DIGITS_OF_PRECISION_LOOSE,
    UNKNOWN_MOD_BASE_NAME,
)

logger = logging.getLogger(__name__)

# Auto-generated names, widest prefix first: (prefix, digits, largest value)
UNKNOWN_NAME_FAMILIES = [
    (UNKNOWN_MOD_BASE_NAME, 2, 99),
    ("Unk", 5, 99999),
    ("U", 7, 9999999),
]

_UNKNOWN_NAME_PATTERNS = [
    re.compile(r"^{}(\d{{{}}})$".format(re.escape(prefix), digits))
    for prefix, digits, _ in UNKNOWN_NAME_FAMILIES
]


def parse_unknown_tag_number(name: str) -> Optional[int]:
    """Return the sequence number of an auto-generated tag name, or None."""
    for pattern in _UNKNOWN_NAME_PATTERNS:
        match = pattern.match(name)
        if match:
            return int(match.group(1))
    return None


def format_unknown_tag_name(number: int) -> str:
    """
    Build the 8-character name for the n-th unknown mass.

    Numbers 1-99 use 'UnkMod' and two digits. Larger numbers move on to
    'Unk' and five digits, then 'U' and seven digits.
    """
    for prefix, digits, largest in UNKNOWN_NAME_FAMILIES:
        if number <= largest:
            return prefix + str(number).zfill(digits)
    raise OverflowError(f"No unknown modification names left (requested #{number}).")


class MassCorrectionTagTable:
    """
    Ordered mapping of mass correction tag name to monoisotopic mass.

    Tags are looked up by mass. Unknown masses get a generated name
    (UnkMod01, UnkMod02, ...) which is stored so that the same mass
    keeps its name for the lifetime of the table.

    Example
    -------
    >>> tags = MassCorrectionTagTable()
    >>> tags.lookup_or_create(79.9663)
    'Phosph'
    """

    def __init__(self, tags: Optional[Dict[str, float]] = None):
        self._tags: Dict[str, float] = {}
        self._largest_unknown_number = 0
        if tags is None:
            self.reset_to_defaults()
        else:
            for name, mass in tags.items():
                self.store(name, mass)

    def __len__(self):
        return len(self._tags)

    def __contains__(self, name):
        return self.contains(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def items(self) -> Iterator[Tuple[str, float]]:
        return iter(self._tags.items())

    def contains(self, name: str) -> bool:
        return name.strip() in self._tags

    def get_mass(self, name: str) -> Optional[float]:
        return self._tags.get(name.strip())

    def clear(self) -> None:
        self._tags.clear()
        self._largest_unknown_number = 0

    def reset_to_defaults(self) -> None:
        self.clear()
        for name, mass in DEFAULT_MASS_CORRECTION_TAGS.items():
            self.store(name, mass)

    def store(self, name: str, mass: float) -> bool:
        """
        Add a tag. An existing name keeps its original mass.

        Returns
        -------
        bool
            True if the tag was added.
        """
        name = name.strip()
        if name in self._tags:
            logger.debug(f"Ignoring duplicate mass correction tag: {name}, mass {mass:.3f}")
            return False

        self._tags[name] = float(mass)
        number = parse_unknown_tag_number(name)
        if number is not None and number > self._largest_unknown_number:
            self._largest_unknown_number = number
        return True

    def find_closest(self, mass: float) -> Tuple[str, float]:
        """
        Return the name of the tag closest in mass and the absolute mass difference.

        On ties the entry found first in table order is kept.
        """
        closest_name = ""
        closest_diff = float("inf")
        for name, tag_mass in self._tags.items():
            diff = abs(mass - tag_mass)
            if diff < closest_diff:
                closest_name = name
                closest_diff = diff
        return closest_name, closest_diff

    def lookup_or_create(
        self,
        mass: float,
        precision: int = MASS_DIGITS_OF_PRECISION,
        create_if_missing: bool = True,
        loose_precision: int = MASS_DIGITS_OF_PRECISION_LOOSE,
    ) -> str:
        """
        Find the mass correction tag for a modification mass.

        The closest tag matches when the mass difference rounds to zero at
        `precision` digits; failing that, at `loose_precision` digits.

        Parameters
        ----------
        mass: float
            Modification mass.
        precision: int
            Number of digits after the decimal point used for the strict comparison.
        create_if_missing: bool
            Generate and store a new name when no tag matches.
        loose_precision: int
            Number of digits used for the lenient comparison. Clamped between 1 and `precision`.

        Returns
        -------
        str
            The tag name, or an empty string when there is no match and
            `create_if_missing` is False.
        """
        loose_precision = max(1, min(loose_precision, precision))

        closest_name, closest_diff = self.find_closest(mass)
        if closest_name:
            for current_precision in sorted({precision, loose_precision}, reverse=True):
                if round(closest_diff, current_precision) == 0:
                    return closest_name

        if not create_if_missing:
            return ""

        name = format_unknown_tag_name(self._largest_unknown_number + 1)
        self.store(name, mass)
        logger.info(f"Defined mass correction tag {name} for unknown mass {mass:.4f}")
        return name

    def read_file(self, file_path: str) -> Tuple[bool, bool]:
        """
        Replace the table with tags read from a tab-delimited file.

        Column 1 holds the tag name, column 2 its mass. Lines without a
        numeric mass are skipped. When the file yields no tags, the defaults
        are restored.

        Returns
        -------
        tuple
            (success, file_not_found)
        """
        if not file_path or not file_path.strip():
            self.reset_to_defaults()
            return True, False

        if not os.path.isfile(file_path):
            logger.warning(f"Mass correction tags file not found: {file_path}")
            self.reset_to_defaults()
            return False, True

        self.clear()
        try:
            with open(file_path, "r", encoding="utf-8") as handle:
                for line in handle:
                    columns = line.rstrip("\r\n").split("\t")
                    if len(columns) < 2 or not columns[0].strip():
                        continue
                    try:
                        mass = float(columns[1].strip())
                    except ValueError:
                        continue
                    self.store(columns[0], mass)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Error reading mass correction tags file {file_path}: {e}; using the default tags")
            self.reset_to_defaults()
            return False, False

        if len(self._tags) == 0:
            logger.warning(
                f"No mass correction tags read from {file_path}; using the default tags"
            )
            self.reset_to_defaults()
        else:
            logger.info(f"Loaded {len(self._tags)} mass correction tags from {file_path}")
        return True, False

    @classmethod
    def from_file(cls, file_path: str) -> "MassCorrectionTagTable":
        table = cls()
        table.read_file(file_path)
        return table
