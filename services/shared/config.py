import os


def optional_env(name: str, default: str = "") -> str:
    """
    Read an optional environment variable with a safe default.
    An empty value is treated the same as an absent one.
    """
    value = os.environ.get(name, "")
    return value if value != "" else default


def optional_secret(name: str) -> str | None:
    """Read a secret that may be left unset. Returns None when absent or empty."""
    return os.environ.get(name) or None


def int_env(name: str, default: int) -> int:
    """
    Read an integer environment variable.
    Raises RuntimeError at startup if the value is not a valid integer.
    """
    raw = optional_env(name, str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(
            f"Environment variable '{name}' must be an integer, got {raw!r}."
        ) from None


def float_env(name: str, default: float) -> float:
    raw = optional_env(name, str(default)).strip()
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(
            f"Environment variable '{name}' must be a number, got {raw!r}."
        ) from None
    if value <= 0:
        raise RuntimeError(f"Environment variable '{name}' must be positive, got {raw!r}.")
    return value
