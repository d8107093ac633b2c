import logging

# Only the head of the file is sniffed; a NUL byte there marks it as binary
BINARY_SNIFF_BYTES = 8 * 1024


def is_binary_bytes(data: bytes) -> bool:
    return b"\x00" in data


def is_binary(path: str) -> bool:
    """
    Decide whether a file should be skipped as binary.

    Reads at most BINARY_SNIFF_BYTES. A file that cannot be opened or read
    is reported as binary too, so the caller never tries to decode it.
    An empty file is text.
    """
    try:
        with open(path, "rb") as file:
            head = file.read(BINARY_SNIFF_BYTES)
    except OSError as e:
        logging.debug(f"Cannot sniff {path}: {e}")
        return True

    return is_binary_bytes(head)
