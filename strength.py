import math
from dataclasses import dataclass, field

# --- Score ---

LABELS = ["weak", "fair", "good", "strong"]
DESCRIPTIVE_LABELS = ["Débil", "Regular", "Buena", "Fuerte"]
MAX_SCORE = 4


@dataclass(frozen=True)
class StrengthResult:
    score: int
    label: str
    description: str
    feedback: list = field(default_factory=list)
    entropy_bits: float = 0.0
    crack_time: str = ""

    def to_dict(self):
        return {
            "score": self.score,
            "max_score": MAX_SCORE,
            "label": self.label,
            "description": self.description,
            "feedback": list(self.feedback),
            "entropy": self.entropy_bits,
            "crack_time": self.crack_time,
        }


def score(password, options):
    """Score a password 0-4 from its length and the selected classes.

    Scores 3 and 4 share the "strong" label: there are only four labels and
    the lookup is capped at index 3.
    """
    points = 0
    feedback = []
    char_types = options.class_count()

    if len(password) >= 12:
        points += 1
    else:
        feedback.append("Use at least 12 characters")
    if char_types >= 3:
        points += 1
    else:
        feedback.append("Include more character types")
    if len(password) >= 16:
        points += 1
    if len(password) >= 20 and char_types == 4:
        points += 1

    index = min(points, len(LABELS) - 1)
    return StrengthResult(
        score=points,
        label=LABELS[index],
        description=DESCRIPTIVE_LABELS[index],
        feedback=feedback,
        entropy_bits=entropy_bits(password),
        crack_time=estimate_crack_time(password),
    )


# --- Entropy & crack time ---

GUESSES_PER_SECOND = 1e12
MINUTE = 60
HOUR = 3600
DAY = 86400
YEAR = 31536000
MILLENNIUM = YEAR * 1000


def alphabet_size(password):
    """Estimate the attacker's alphabet from the characters actually present."""
    size = 0
    if any("a" <= c <= "z" for c in password):
        size += 26
    if any("A" <= c <= "Z" for c in password):
        size += 26
    if any("0" <= c <= "9" for c in password):
        size += 10
    if any(not ("a" <= c <= "z" or "A" <= c <= "Z" or "0" <= c <= "9") for c in password):
        size += 32
    return size


def entropy_bits(password):
    size = alphabet_size(password)
    if size == 0:
        return 0.0
    return len(password) * math.log2(size)


def seconds_to_break(bits):
    # Half the keyspace on average
    try:
        return 2.0 ** (bits - 1) / GUESSES_PER_SECOND
    except OverflowError:
        return math.inf


def _round(value):
    # Halves round up, not to even
    return int(math.floor(value + 0.5))


def _plural(count, unit):
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_crack_time(seconds):
    if seconds < MINUTE:
        return "under a minute"
    elif seconds < HOUR:
        return _plural(_round(seconds / MINUTE), "minute")
    elif seconds < DAY:
        return _plural(_round(seconds / HOUR), "hour")
    elif seconds < YEAR:
        return _plural(_round(seconds / DAY), "day")
    elif seconds < MILLENNIUM:
        return _plural(_round(seconds / YEAR), "year")
    return "over 1000 years"


def estimate_crack_time(password):
    # Brute force at GUESSES_PER_SECOND; ignores the options that produced it
    return format_crack_time(seconds_to_break(entropy_bits(password)))
