import operator


class OutOfRangeReference(ValueError):
    """A page id outside the virtual address space was referenced."""

    def __init__(self, page_num, num_pages):
        super().__init__(f"Page reference {page_num!r} outside [0, {num_pages})")
        self.page_num = page_num
        self.num_pages = num_pages


class PageTableEntry:
    def __init__(self, virtual_page_num):
        self.virtual_page_num = virtual_page_num
        self.physical_page_num = None  # None means not in memory
        self.recency = 0  # For LRU/MRU: references since last access

    def is_valid(self):
        return self.physical_page_num is not None


class PageTable:
    def __init__(self, num_pages=1024):
        if num_pages < 1:
            raise ValueError(f"num_pages must be positive, got {num_pages}")
        self.num_pages = num_pages
        self.entries = [PageTableEntry(i) for i in range(num_pages)]

    def check_reference(self, virtual_page_num):
        """Return the page id as a plain int, or raise OutOfRangeReference."""
        # bool is an int subclass but never a page id
        if isinstance(virtual_page_num, bool):
            raise OutOfRangeReference(virtual_page_num, self.num_pages)
        try:
            page_num = operator.index(virtual_page_num)
        except TypeError:
            raise OutOfRangeReference(virtual_page_num, self.num_pages) from None
        if not 0 <= page_num < self.num_pages:
            raise OutOfRangeReference(virtual_page_num, self.num_pages)
        return page_num

    def get_entry(self, virtual_page_num):
        return self.entries[self.check_reference(virtual_page_num)]

    def lookup(self, virtual_page_num):
        return self.get_entry(virtual_page_num).physical_page_num

    def resident_entries(self):
        return [entry for entry in self.entries if entry.is_valid()]

    def snapshot(self):
        """Rows of (page, frame, valid, recency) for every page."""
        return tuple(
            (entry.virtual_page_num, entry.physical_page_num, entry.is_valid(), entry.recency)
            for entry in self.entries
        )
