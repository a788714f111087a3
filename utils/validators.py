# utils/validators.py
import re
import unicodedata
from datetime import date, datetime

import pandas as pd


# -----------------------------
# Required text
# -----------------------------
def is_blank(val) -> bool:
    """True for None, NaN and strings that are empty after stripping."""
    if val is None:
        return True
    if isinstance(val, str):
        return not val.strip()
    try:
        return bool(pd.isna(val))
    except (TypeError, ValueError):
        return False


# -----------------------------
# String Normalization
# -----------------------------
def normalize_string(val):
    """Normalize strings (strip + lowercase)."""
    if isinstance(val, str):
        return val.strip().lower()
    elif not is_blank(val):
        return str(val).strip().lower()
    return ''


def collation_key(val) -> str:
    """Accent- and case-insensitive key for ordering text columns."""
    text = unicodedata.normalize("NFKD", "" if val is None else str(val))
    return "".join(c for c in text if not unicodedata.combining(c)).casefold()


# -----------------------------
# Safe numeric conversions
# -----------------------------
def safe_float(val):
    """Convert to float safely (handles comma decimals, NaN)."""
    if isinstance(val, bool):
        return None
    try:
        if not is_blank(val):
            if isinstance(val, str):
                val = val.strip().replace(",", ".")
            result = float(val)
            return None if pd.isna(result) else result
    except (TypeError, ValueError):
        pass
    return None


def plain_number(val) -> str:
    """Render a number without trailing zeros: 12 -> '12', 12.5 -> '12.5'."""
    num = safe_float(val)
    if num is None:
        return ""
    if num.is_integer():
        return str(int(num))
    return repr(num)


# -----------------------------
# Safe date conversions
# -----------------------------
def safe_date(val):
    """Convert to datetime.date safely. Accepts ISO strings, datetimes and dates."""
    if is_blank(val):
        return None
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    if isinstance(val, str):
        val = val.strip()
        for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
            try:
                return datetime.strptime(val, fmt).date()
            except ValueError:
                continue
        # Full ISO timestamps from the API ("2024-03-01T00:00:00.000Z")
        dt = pd.to_datetime(val, errors="coerce", utc=True, format="ISO8601")
        if pd.notna(dt):
            return dt.date()
    return None


# -----------------------------
# Password strength (sign-up)
# -----------------------------
PASSWORD_STRENGTH_LABELS = ["Muy débil", "Débil", "Media", "Fuerte", "Muy fuerte"]


def password_strength(password: str) -> int:
    """Score 0-4: length >= 8, an uppercase letter, a digit, a symbol."""
    if not password:
        return 0
    score = 0
    if len(password) >= 8:
        score += 1
    if re.search(r"[A-Z]", password):
        score += 1
    if re.search(r"[0-9]", password):
        score += 1
    if re.search(r"[^A-Za-z0-9]", password):
        score += 1
    return score


def password_strength_label(password: str) -> str:
    if not password:
        return ""
    return PASSWORD_STRENGTH_LABELS[password_strength(password)]
