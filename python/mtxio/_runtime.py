_current_precision = None


def set_precision(n=None) -> None:
    """Set the default number of significant digits written for reals.

    ``None`` restores the default: the shortest text that reads back to the
    same value.
    """
    global _current_precision
    if n is None:
        _current_precision = None
        return
    n = int(n)
    if n < 1:
        raise ValueError("precision must be a positive integer")
    _current_precision = n


def get_precision():
    return _current_precision
