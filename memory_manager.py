class Frame:
    def __init__(self, frame_num):
        self.frame_num = frame_num
        self.occupant = None  # virtual page number, or None if free

    def is_free(self):
        return self.occupant is None


class PhysicalMemory:
    def __init__(self, num_frames=48):
        if num_frames < 1:
            raise ValueError(f"num_frames must be positive, got {num_frames}")
        self.num_frames = num_frames
        self.frames = [Frame(i) for i in range(num_frames)]

    def get_frame_info(self, frame_num):
        return self.frames[frame_num].occupant

    def is_resident_and_current(self, frame_num, virtual_page_num):
        # The page entry alone is not trusted; the frame must agree
        if frame_num is None or not 0 <= frame_num < self.num_frames:
            return False
        return self.frames[frame_num].occupant == virtual_page_num

    def bind(self, entry, frame_num):
        """Map a page table entry to a frame, updating both sides together."""
        frame = self.frames[frame_num]
        if frame.occupant is not None and frame.occupant != entry.virtual_page_num:
            raise ValueError(f"Frame {frame_num} already holds page {frame.occupant}")
        frame.occupant = entry.virtual_page_num
        entry.physical_page_num = frame_num
        entry.recency = 0

    def unbind(self, entry):
        frame_num = entry.physical_page_num
        if frame_num is not None and self.frames[frame_num].occupant == entry.virtual_page_num:
            self.frames[frame_num].occupant = None
        entry.physical_page_num = None
        entry.recency = 0

    def evict(self, frame_num, page_table):
        """Free a frame in place and invalidate its page, if it has one.

        Returns the evicted page number or None.
        """
        old_page = self.frames[frame_num].occupant
        if old_page is not None:
            self.unbind(page_table.get_entry(old_page))
        return old_page

    def occupied_frames(self):
        return [frame.frame_num for frame in self.frames if not frame.is_free()]


class FreeFrameList:
    """LIFO stack of unoccupied frame numbers, full at the start of a run."""

    def __init__(self, num_frames=48):
        self.frames = list(range(num_frames))

    def try_allocate(self):
        if not self.frames:
            return None
        return self.frames.pop()

    def release(self, frame_num):
        if frame_num in self.frames:
            raise ValueError(f"Frame {frame_num} is already on the free list")
        self.frames.append(frame_num)

    def __len__(self):
        return len(self.frames)


class Statistics:
    def __init__(self):
        self.page_faults = 0
        self.soft_faults = 0
        self.hard_faults = 0
        self.hits = 0
        self.evictions = []  # (frame, evicted page or None, incoming page)
        self.snapshots = []  # page table after each fault, verbose runs only

    def record_hit(self):
        self.hits += 1

    def record_page_fault(self, eviction=None):
        self.page_faults += 1
        if eviction is not None:
            self.hard_faults += 1
            self.evictions.append(eviction)
        else:
            self.soft_faults += 1

    @property
    def references(self):
        return self.hits + self.page_faults

    def __str__(self):
        return (f"Page Faults: {self.page_faults}\n"
                f"Hits: {self.hits}\n"
                f"Evictions: {self.hard_faults}")
