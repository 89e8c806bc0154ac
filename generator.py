import logging
import random
import string
from dataclasses import dataclass

log = logging.getLogger(__name__)

_default_rng = random.Random()

# --- Character classes ---

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
NUMBERS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
AMBIGUOUS = "0O1lI"

# Fixed order used for both the guaranteed prefix and the combined pool
CHARACTER_CLASSES = (
    ("uppercase", UPPERCASE),
    ("lowercase", LOWERCASE),
    ("numbers", NUMBERS),
    ("symbols", SYMBOLS),
)

# Symbols are never filtered, even where they overlap AMBIGUOUS
FILTERED_CLASSES = ("uppercase", "lowercase", "numbers")

NO_CLASS_SELECTED = "Select at least one character type"


class InvalidOptionsError(ValueError):
    pass


# --- Options ---

def _as_length(value):
    # JSON true, 12.9 and Infinity are not lengths
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError("length must be a whole number")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError("length must be a whole number") from None


def _as_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "on", "yes")
    return bool(value)


@dataclass(frozen=True)
class GenerationOptions:
    length: int = 12
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = False
    exclude_ambiguous: bool = False

    # field -> keys accepted from forms, JSON bodies and saved preferences
    _KEYS = {
        "include_uppercase": ("include_uppercase", "includeUppercase", "uppercase", "upper"),
        "include_lowercase": ("include_lowercase", "includeLowercase", "lowercase", "lower"),
        "include_numbers": ("include_numbers", "includeNumbers", "numbers", "digits"),
        "include_symbols": ("include_symbols", "includeSymbols", "symbols"),
        "exclude_ambiguous": ("exclude_ambiguous", "excludeAmbiguous"),
    }

    @classmethod
    def from_mapping(cls, data):
        """Read options from a request body or preference mapping.

        Missing keys keep their defaults. ``length`` must be a whole number,
        anything else raises ValueError for the caller to report.
        """
        data = data or {}
        values = {}
        if data.get("length") not in (None, ""):
            values["length"] = _as_length(data["length"])
        for field, keys in cls._KEYS.items():
            for key in keys:
                if key in data:
                    values[field] = _as_bool(data[key])
                    break
        return cls(**values)

    def selected(self):
        flags = {
            "uppercase": self.include_uppercase,
            "lowercase": self.include_lowercase,
            "numbers": self.include_numbers,
            "symbols": self.include_symbols,
        }
        return [name for name, _ in CHARACTER_CLASSES if flags[name]]

    def class_count(self):
        return len(self.selected())

    def to_dict(self):
        return {
            "length": self.length,
            "include_uppercase": self.include_uppercase,
            "include_lowercase": self.include_lowercase,
            "include_numbers": self.include_numbers,
            "include_symbols": self.include_symbols,
            "exclude_ambiguous": self.exclude_ambiguous,
        }


# --- Pools ---

def effective_pool(name, exclude_ambiguous=False):
    chars = dict(CHARACTER_CLASSES)[name]
    if exclude_ambiguous and name in FILTERED_CLASSES:
        chars = "".join(c for c in chars if c not in AMBIGUOUS)
    return chars


def selected_pools(options):
    return [effective_pool(name, options.exclude_ambiguous) for name in options.selected()]


def available_pool(options):
    # Concatenated in class order, duplicates across classes are kept
    return "".join(selected_pools(options))


# --- Randomness ---

def get_rng(secure=False):
    """Return the random source used by generate().

    The default is Python's Mersenne Twister, which is fine for a demo tool
    but predictable to an observer who sees enough output. Pass secure=True
    to draw from the OS CSPRNG instead.
    """
    if secure:
        return random.SystemRandom()
    return _default_rng


# --- Generator ---

def generate(options, rng=None):
    if rng is None:
        rng = get_rng()
    pools = selected_pools(options)
    if not pools:
        raise InvalidOptionsError(NO_CLASS_SELECTED)
    log.debug("generating password: length=%s classes=%s exclude_ambiguous=%s",
              options.length, ",".join(options.selected()), options.exclude_ambiguous)

    chars = [rng.choice(pool) for pool in pools]
    # A length below the class count keeps the whole prefix
    remaining = max(options.length - len(chars), 0)
    combined = available_pool(options)
    for _ in range(remaining):
        chars.append(rng.choice(combined))

    # random.Random.shuffle is an in-place Fisher-Yates
    rng.shuffle(chars)
    return "".join(chars)
