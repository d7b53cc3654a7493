import random

DEFAULT_FILENAME = 'reference_string.txt'
MAX_REPEATS = 5


def create_reference_string(length=500, num_pages=1024, rng=None):
    """
    Build a synthetic trace with some locality of reference.

    The trace starts at page 0. After that a page is drawn uniformly from
    the address space and repeated 0 to MAX_REPEATS - 1 times, until the
    trace is `length` references long.
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    rng = rng if rng is not None else random

    references = [0] if length else []
    while len(references) < length:
        repeats = rng.randrange(MAX_REPEATS)
        page_num = int(rng.random() * num_pages)
        references.extend([page_num] * repeats)

    return references[:length]


def write_reference_string(references, filename=DEFAULT_FILENAME):
    with open(filename, 'w') as f:
        for page_num in references:
            f.write(f"{page_num}\n")


def read_reference_string(filename=DEFAULT_FILENAME):
    references = []
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            token = line.strip()
            if not token:
                continue
            try:
                references.append(int(token))
            except ValueError:
                raise ValueError(f"{filename}:{line_num}: not a page number: {token!r}") from None
    return references


def format_reference_string(references):
    return '\t'.join(str(page_num) for page_num in references)
