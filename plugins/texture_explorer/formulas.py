"""
Formula Catalogue - per-channel color functions of (x, y)

Each channel (red, green, blue) has eleven formulas. Indices 0-9 are
closed-form numeric expressions; index 10 is the "off" formula and always
yields 0. Formulas operate element-wise on float64 numpy arrays, so the
rasterizer can shade a whole column of pixels per call.

Guards are placed per formula, not generalized: some formulas protect a
division or a sqrt, others deliberately leave a pow/tan unguarded. Changing
a guard changes the rendered image, so the table below is the reference.
Whatever non-finite values slip through (NaN from pow of a negative base,
overflow to inf) are zeroed in `_finite` before leaving this module.
"""

import numpy as np

from .errors import InvalidArgument

OFF = 10
NUM_FORMULAS = 11  # 0-9 plus the off formula

# tan(21) is a constant divisor in green formula 3
_TAN_21 = np.tan(21.0)


def _finite(values):
    """Replace NaN and +/-inf with 0."""
    return np.where(np.isfinite(values), values, 0.0)


def _off(x, y):
    return np.zeros(np.broadcast(x, y).shape, dtype=np.float64)


# --- Red ---

def _red_0(x, y):
    return np.where(y == 0, 0.0, x * 7 / y)


def _red_1(x, y):
    c = np.cos(y)
    return np.where(c == 0, 0.0, np.sin(x) / c)


def _red_2(x, y):
    c = np.cos(y * x)
    return np.where(c == 0, 0.0, y - x / c)


def _red_3(x, y):
    x = np.abs(x)
    y = np.abs(y)
    return np.sqrt(x) * np.cos(np.sqrt(y))


def _red_4(x, y):
    return np.power(y, 2) * np.cos(x)


def _red_5(x, y):
    return np.tan(np.power(x, y))


def _red_6(x, y):
    y = np.abs(y)
    t = np.tan(np.sqrt(y))
    return np.where(t == 0, 0.0, x * y / t)


def _red_7(x, y):
    return np.cos(x * np.cos(y)) * np.tan(x)


def _red_8(x, y):
    return np.sin(np.sin(x * y) * np.sin(x) * np.sin(y)) * 2


def _red_9(x, y):
    return np.where(y == 0, 0.0, np.sin(x) * np.cos(x) * np.tan(x) / y)


# --- Green ---

def _green_0(x, y):
    return np.tan(x) * np.cos(y)


def _green_1(x, y):
    return np.sin(np.tan(x * y))


def _green_2(x, y):
    return 37 * x + y


def _green_3(x, y):
    return np.where(y == 0, 0.0, x / _TAN_21 / y)


def _green_4(x, y):
    x = np.abs(x)
    y = np.abs(y)
    t = np.tan(x * y)
    return np.where(t == 0, 0.0, np.sqrt(x * y) / t)


def _green_5(x, y):
    return np.tan(x) * np.cos(y) * np.sin(x * y)


def _green_6(x, y):
    # Flipping x makes tan(x*y) non-negative before the sqrt
    x = np.where(np.tan(x * y) < 0, -x, x)
    return np.sin(np.cos(np.sqrt(np.tan(x * y))))


def _green_7(x, y):
    c = np.cos(x)
    return np.where(c == 0, 0.0, y / c)


def _green_8(x, y):
    return np.sin(np.tan(np.power(x, y)))


def _green_9(x, y):
    x = np.abs(x)
    y = np.abs(y)
    s = np.sin(x)
    return np.where(s == 0, 0.0, np.sqrt(x) * np.sqrt(y) / s)


# --- Blue ---

def _blue_0(x, y):
    # x == 0 lights the channel fully
    return np.where(x == 0, 1.0, np.sin(y) / x)


def _blue_1(x, y):
    return np.where(x == 0, 0.0, y - x / x)


def _blue_2(x, y):
    return np.tan(x * np.sin(y) * y)


def _blue_3(x, y):
    return np.where(y == 0, 0.0, np.cos(x) / y)


def _blue_4(x, y):
    s = np.sin(x / y)
    return np.where((y == 0) | (s == 0), 0.0, x * np.tan(x) * np.cos(y) / s)


def _blue_5(x, y):
    return np.cos(np.sin(y)) * np.cos(np.sin(x))


def _blue_6(x, y):
    x = np.where(np.sin(x) < 0, -x, x)
    return np.sqrt(np.sin(x)) * y


def _blue_7(x, y):
    return np.where(x == 0, 0.0, np.power(np.sin(x), y) / x)


def _blue_8(x, y):
    return 0.215 * np.sin(x + y)


def _blue_9(x, y):
    return x + np.tan(1.1265 * y)


# Registry: channel -> list of (expression, function), indexed by formula index
FORMULAS = {
    "red": [
        ("x * 7 / y", _red_0),
        ("sin(x) / cos(y)", _red_1),
        ("y - x / cos(y * x)", _red_2),
        ("sqrt(|x|) * cos(sqrt(|y|))", _red_3),
        ("y^2 * cos(x)", _red_4),
        ("tan(x^y)", _red_5),
        ("x * |y| / tan(sqrt(|y|))", _red_6),
        ("cos(x * cos(y)) * tan(x)", _red_7),
        ("2 * sin(sin(x * y) * sin(x) * sin(y))", _red_8),
        ("sin(x) * cos(x) * tan(x) / y", _red_9),
        ("off", _off),
    ],
    "green": [
        ("tan(x) * cos(y)", _green_0),
        ("sin(tan(x * y))", _green_1),
        ("37 * x + y", _green_2),
        ("x / tan(21) / y", _green_3),
        ("sqrt(|x * y|) / tan(|x * y|)", _green_4),
        ("tan(x) * cos(y) * sin(x * y)", _green_5),
        ("sin(cos(sqrt(|tan(x * y)|)))", _green_6),
        ("y / cos(x)", _green_7),
        ("sin(tan(x^y))", _green_8),
        ("sqrt(|x|) * sqrt(|y|) / sin(|x|)", _green_9),
        ("off", _off),
    ],
    "blue": [
        ("sin(y) / x", _blue_0),
        ("y - x / x", _blue_1),
        ("tan(x * sin(y) * y)", _blue_2),
        ("cos(x) / y", _blue_3),
        ("x * tan(x) * cos(y) / sin(x / y)", _blue_4),
        ("cos(sin(y)) * cos(sin(x))", _blue_5),
        ("sqrt(|sin(x)|) * y", _blue_6),
        ("sin(x)^y / x", _blue_7),
        ("0.215 * sin(x + y)", _blue_8),
        ("x + tan(1.1265 * y)", _blue_9),
        ("off", _off),
    ],
}

CHANNEL_ORDER = ["red", "green", "blue"]


def check_index(index, upper=OFF):
    """Return `index` as an int in [0, upper], or raise InvalidArgument."""
    # bool is an int subclass; True/False are not formula indices
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise InvalidArgument(f"Formula index must be an integer, got {index!r}")
    if not 0 <= index <= upper:
        raise InvalidArgument(f"Formula index {index} out of range [0, {upper}]")
    return int(index)


def _lookup(channel, index):
    if channel not in FORMULAS:
        raise InvalidArgument(f"Unknown channel: {channel!r}. Expected one of {CHANNEL_ORDER}")
    return FORMULAS[channel][check_index(index)]


def get_expression(channel, index):
    """Human-readable expression for a channel formula."""
    return _lookup(channel, index)[0]


def evaluate(channel, index, x, y):
    """
    Evaluate one channel formula over arrays (or scalars) of x and y.

    Args:
        channel: "red", "green" or "blue"
        index: Formula index in [0, 10]
        x, y: float arrays of matching (or broadcastable) shape

    Returns:
        float64 array of finite channel values. Not clamped: values can
        fall outside [0, 1], clamping belongs to the render sink.

    Raises:
        InvalidArgument: unknown channel, or index not an int in [0, 10]
    """
    fn = _lookup(channel, index)[1]
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    with np.errstate(all="ignore"):
        return _finite(fn(x, y))


def _evaluate_scalar(channel, index, x, y):
    return float(evaluate(channel, index, x, y))


def evaluate_red(index, x, y):
    """Red contribution at a single point (x, y)."""
    return _evaluate_scalar("red", index, x, y)


def evaluate_green(index, x, y):
    """Green contribution at a single point (x, y)."""
    return _evaluate_scalar("green", index, x, y)


def evaluate_blue(index, x, y):
    """Blue contribution at a single point (x, y)."""
    return _evaluate_scalar("blue", index, x, y)


def shade(indices, x, y):
    """
    Evaluate all three channels at once.

    Args:
        indices: (red, green, blue) formula indices
        x, y: 1D float arrays of sample coordinates

    Returns:
        (N, 3) float64 array of RGB values
    """
    return np.stack([
        evaluate(channel, index, x, y)
        for channel, index in zip(CHANNEL_ORDER, indices)
    ], axis=-1)
