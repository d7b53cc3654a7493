import pytest

from memory_manager import FreeFrameList, PhysicalMemory, Statistics
from page_table import PageTable


def test_free_list_is_lifo():
    free_frames = FreeFrameList(num_frames=3)

    assert len(free_frames) == 3
    assert free_frames.try_allocate() == 2
    assert free_frames.try_allocate() == 1

    free_frames.release(2)
    assert free_frames.try_allocate() == 2
    assert free_frames.try_allocate() == 0
    assert free_frames.try_allocate() is None
    assert len(free_frames) == 0


def test_release_twice_rejected():
    free_frames = FreeFrameList(num_frames=2)

    with pytest.raises(ValueError):
        free_frames.release(1)


def test_bind_updates_both_tables():
    memory = PhysicalMemory(num_frames=4)
    page_table = PageTable(num_pages=8)
    entry = page_table.get_entry(5)
    entry.recency = 3

    memory.bind(entry, 1)

    assert page_table.lookup(5) == 1
    assert memory.get_frame_info(1) == 5
    assert memory.is_resident_and_current(1, 5)
    assert entry.recency == 0
    assert memory.occupied_frames() == [1]
    assert [f.frame_num for f in memory.frames if f.is_free()] == [0, 2, 3]


def test_bind_to_occupied_frame_rejected():
    memory = PhysicalMemory(num_frames=2)
    page_table = PageTable(num_pages=8)
    memory.bind(page_table.get_entry(0), 0)

    with pytest.raises(ValueError):
        memory.bind(page_table.get_entry(1), 0)


def test_unbind_clears_both_tables():
    memory = PhysicalMemory(num_frames=2)
    page_table = PageTable(num_pages=8)
    entry = page_table.get_entry(3)
    memory.bind(entry, 0)

    memory.unbind(entry)

    assert not entry.is_valid()
    assert memory.get_frame_info(0) is None
    assert not memory.is_resident_and_current(0, 3)


def test_is_resident_and_current_detects_stale_entry():
    memory = PhysicalMemory(num_frames=2)
    page_table = PageTable(num_pages=8)
    memory.bind(page_table.get_entry(3), 0)
    memory.frames[0].occupant = 4

    assert page_table.get_entry(3).is_valid()
    assert not memory.is_resident_and_current(0, 3)
    assert not memory.is_resident_and_current(None, 3)
    assert not memory.is_resident_and_current(7, 3)


def test_evict_tolerates_empty_frame():
    memory = PhysicalMemory(num_frames=2)
    page_table = PageTable(num_pages=8)

    assert memory.evict(1, page_table) is None

    memory.bind(page_table.get_entry(6), 1)
    assert memory.evict(1, page_table) == 6
    assert page_table.lookup(6) is None
    assert memory.get_frame_info(1) is None


def test_statistics():
    stats = Statistics()
    stats.record_page_fault()
    stats.record_page_fault(eviction=(0, 1, 2))
    stats.record_hit()

    assert stats.page_faults == 2
    assert stats.soft_faults == 1
    assert stats.hard_faults == 1
    assert stats.evictions == [(0, 1, 2)]
    assert stats.references == 3
    assert "Page Faults: 2" in str(stats)
