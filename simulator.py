import argparse
import random
import sys
import time
from itertools import islice

from page_table import PageTable, OutOfRangeReference
from memory_manager import PhysicalMemory, FreeFrameList, Statistics
from replacement import ALGORITHMS, make_policy
from reference_string import (
    DEFAULT_FILENAME,
    create_reference_string,
    format_reference_string,
    read_reference_string,
    write_reference_string,
)

MAX_PAGES = 1024
MAX_FRAMES = 48
TRACE_LENGTH = 500

HIT = 'HIT'
SOFT_FAULT = 'SOFT_FAULT'
HARD_FAULT = 'HARD_FAULT'


class SimulationResult:
    def __init__(self, algorithm, stats):
        self.algorithm = algorithm
        self.stats = stats

    @property
    def page_faults(self):
        return self.stats.page_faults

    @property
    def snapshots(self):
        return self.stats.snapshots

    def __repr__(self):
        return f"SimulationResult({self.algorithm!r}, page_faults={self.page_faults})"


class VirtualMemorySimulator:

    def __init__(self, algorithm='FIFO', num_frames=MAX_FRAMES, num_pages=MAX_PAGES,
                 verbose=False, future_references=None, rng=None):
        self.algorithm = algorithm
        self.verbose = verbose
        self.page_table = PageTable(num_pages=num_pages)
        self.physical_memory = PhysicalMemory(num_frames=num_frames)
        self.free_frames = FreeFrameList(num_frames=num_frames)
        self.stats = Statistics()
        self.current_time = 0
        self.future_references = future_references

        # Random policies draw from the process-wide generator unless given their own
        self.policy = make_policy(algorithm, num_frames, rng=rng)

    def handle_memory_reference(self, page_num):
        # Reject before any table is indexed
        page_num = self.page_table.check_reference(page_num)
        self.current_time += 1

        entry = self.page_table.get_entry(page_num)

        if self.physical_memory.is_resident_and_current(entry.physical_page_num, page_num):
            self.stats.record_hit()
            outcome = HIT
        else:
            if entry.is_valid():
                # Page entry points at a frame that no longer holds it
                self.physical_memory.unbind(entry)
            outcome = self.handle_page_fault(entry)

        if self.policy.tracks_recency:
            self.update_recency(page_num)

        if outcome != HIT and self.verbose:
            self.stats.snapshots.append(self.page_table.snapshot())

        return outcome

    def handle_page_fault(self, entry):
        frame_num = self.free_frames.try_allocate()

        if frame_num is not None:
            self.physical_memory.bind(entry, frame_num)
            self.stats.record_page_fault()
            return SOFT_FAULT

        frame_num = self.select_victim_page()
        evicted_page = self.physical_memory.evict(frame_num, self.page_table)
        self.physical_memory.bind(entry, frame_num)
        self.stats.record_page_fault(eviction=(frame_num, evicted_page, entry.virtual_page_num))
        return HARD_FAULT

    def select_victim_page(self):
        future = ()
        if self.policy.needs_future:
            if self.future_references is None:
                raise ValueError(f"{self.algorithm} algorithm requires future_references to be provided")
            future = islice(self.future_references, self.current_time, None)

        frame_num = self.policy.select_victim(self.physical_memory, self.page_table, future)
        if not 0 <= frame_num < self.physical_memory.num_frames:
            raise RuntimeError(f"{self.algorithm} picked frame {frame_num} out of range")
        return frame_num

    def update_recency(self, page_num):
        for frame in self.physical_memory.frames:
            if frame.occupant is None:
                continue
            entry = self.page_table.entries[frame.occupant]
            if frame.occupant == page_num:
                entry.recency = 0
            else:
                entry.recency += 1

    def tables_consistent(self):
        """Check every frame is free xor occupied and pages and frames agree."""
        num_frames = self.physical_memory.num_frames
        free = set(self.free_frames.frames)
        occupied = set(self.physical_memory.occupied_frames())
        if len(free) != len(self.free_frames) or free & occupied:
            return False
        if free | occupied != set(range(num_frames)):
            return False

        resident = self.page_table.resident_entries()
        if len(resident) != len(occupied):
            return False
        return all(
            self.physical_memory.is_resident_and_current(entry.physical_page_num, entry.virtual_page_num)
            for entry in resident
        )

    def run_simulation(self, references):
        if self.policy.needs_future and self.future_references is None:
            self.future_references = list(references)
            references = self.future_references

        for page_num in references:
            self.handle_memory_reference(page_num)

        return SimulationResult(self.algorithm, self.stats)


def run_all_policies(references, algorithms=None, num_frames=MAX_FRAMES, num_pages=MAX_PAGES,
                     verbose=False, random_seed=None):
    """
    Replay one trace under each algorithm with fresh tables per run.

    RAN and RAN2 draw from the process-wide generator in run order. It is
    only reseeded when `random_seed` is given; otherwise the caller's
    seeding (or none) stands.
    """
    if algorithms is None:
        algorithms = ALGORITHMS
    references = list(references)

    if random_seed is not None:
        random.seed(random_seed)

    results = {}
    for algorithm in algorithms:
        simulator = VirtualMemorySimulator(algorithm=algorithm, num_frames=num_frames,
                                           num_pages=num_pages, verbose=verbose,
                                           future_references=references)
        results[algorithm] = simulator.run_simulation(references)
    return results


def display_page_table(snapshot, algorithm, resident_only=False):
    print(f"Page Replacement Algorithm: {algorithm}")
    if algorithm in ('LRU', 'MRU'):
        print(f"{'Page':<8} {'Frame':<8} {'Valid':<8} {'Auxiliary':<10}")
    else:
        print(f"{'Page':<8} {'Frame':<8} {'Valid':<8}")

    for page_num, frame_num, valid, recency in snapshot:
        if resident_only and not valid:
            continue
        frame = "-" if frame_num is None else frame_num
        if algorithm in ('LRU', 'MRU'):
            print(f"{page_num:<8} {frame:<8} {int(valid):<8} {recency:<10}")
        else:
            print(f"{page_num:<8} {frame:<8} {int(valid):<8}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog='pagesim',
        description='Compare page replacement algorithms on a reference string')
    parser.add_argument('-p', '--pages', type=int, default=MAX_PAGES,
                        help='size of the virtual address space in pages')
    parser.add_argument('-n', '--frames', type=int, default=MAX_FRAMES,
                        help='number of physical frames')
    parser.add_argument('-l', '--length', type=int, default=TRACE_LENGTH,
                        help='length of the generated reference string')
    parser.add_argument('-s', '--seed', type=int, default=None,
                        help='seed for the random number generator')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print the reference string and the page table after every fault')
    parser.add_argument('--resident-only', action='store_true',
                        help='with --verbose, list only resident pages in the page table dump')
    parser.add_argument('-a', '--algorithms', nargs='+', choices=ALGORITHMS, default=ALGORITHMS,
                        help='algorithms to run')
    parser.add_argument('--trace-file', default=None,
                        help='replay a saved reference string instead of generating one')
    parser.add_argument('--save-trace', nargs='?', const=DEFAULT_FILENAME, default=None,
                        help='write the generated reference string to a file')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # The only seeding: trace generation and RAN/RAN2 share one stream
    seed = args.seed
    if seed is None:
        seed = int(time.time() * 1000000) % (2**31)
    random.seed(seed)

    try:
        if args.trace_file:
            references = read_reference_string(args.trace_file)
        else:
            references = create_reference_string(args.length, args.pages)
            if args.save_trace:
                write_reference_string(references, args.save_trace)

        if args.verbose:
            print(f"Reference strings (in row order):\n{format_reference_string(references)}")

        results = run_all_policies(references, algorithms=args.algorithms, num_frames=args.frames,
                                   num_pages=args.pages, verbose=args.verbose)
    except (OutOfRangeReference, ValueError, OSError) as e:
        print(f"pagesim: error: {e}", file=sys.stderr)
        return 1

    for algorithm, result in results.items():
        print(f"\n{'='*60}")
        print(f"Running {algorithm} algorithm ({args.frames} frames, {len(references)} references)")
        print(f"{'='*60}")
        for snapshot in result.snapshots:
            display_page_table(snapshot, algorithm, resident_only=args.resident_only)
        print(f"{algorithm}: {result.page_faults}")
        print(result.stats)

    print("\n" + "="*60)
    print(f"SUMMARY (seed {seed})")
    print("="*60)
    print(f"{'Algorithm':<10} {'Page Faults':<15} {'Hits':<15} {'Evictions':<15}")
    print("-" * 60)
    for algorithm, result in results.items():
        stats = result.stats
        print(f"{algorithm:<10} {stats.page_faults:<15} {stats.hits:<15} {stats.hard_faults:<15}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
