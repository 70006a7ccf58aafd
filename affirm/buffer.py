"""
Pre-joined buffers for batched writes.

Writing "y\n" one call at a time spends almost all of its time in call overhead.
Joining enough copies of the line to fill roughly one pipe-sized chunk lets a
single write carry thousands of lines. The buffer always holds whole lines, so
a batch can be repeated or mixed with single-line writes without ever emitting
a partial message.
"""

# Target size in bytes of one batched write.
BUFFER_CAPACITY = 8192

TERMINATOR = "\n"


def build_buffer(
    message: str, capacity_hint: int = BUFFER_CAPACITY, limit: int | None = None
) -> tuple[str, int]:
    """Build `message + "\\n"` repeated to approach `capacity_hint` bytes.

    The repeat count is at least 1 (a message longer than the capacity still
    yields a one-line buffer) and never more than `limit` when one is given.
    A limit of 0 yields ("", 0): there is nothing to write.

    Sizing uses the UTF-8 encoded length, since that is what reaches the stream.

    Returns:
        The buffer and the number of lines it holds.
    """
    if limit == 0:
        return "", 0

    line = message + TERMINATOR
    repeat_count = max(1, capacity_hint // len(line.encode("utf-8")))
    if limit is not None and limit < repeat_count:
        repeat_count = limit

    return line * repeat_count, repeat_count
