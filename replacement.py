"""
Victim selection for the page replacement algorithms.

Each policy is consulted only once the free frame list is empty, so every
frame it can pick holds a page. A policy never fails: it always returns a
frame number in range, and where its ranking ties the lowest frame wins.
"""
import random


class ReplacementPolicy:
    label = None
    tracks_recency = False  # LRU/MRU need the recency counters maintained
    needs_future = False  # OPT needs the rest of the trace

    def __init__(self, num_frames):
        self.num_frames = num_frames

    def select_victim(self, memory, page_table, future=()):
        raise NotImplementedError


class FIFOPolicy(ReplacementPolicy):
    """
    Replace frames in the order they were filled.

    Free frames are handed out from the top of the list down, so a cursor
    that starts at the highest frame and walks down, wrapping back to the
    top after frame 0, always lands on the oldest resident page.
    """
    label = 'FIFO'

    def __init__(self, num_frames):
        super().__init__(num_frames)
        self.cursor = num_frames - 1

    def select_victim(self, memory, page_table, future=()):
        victim_frame = self.cursor
        self.cursor -= 1
        if self.cursor < 0:
            self.cursor = self.num_frames - 1
        return victim_frame


class LRUPolicy(ReplacementPolicy):
    label = 'LRU'
    tracks_recency = True

    def select_victim(self, memory, page_table, future=()):
        victim_frame = 0
        max_recency = -1

        for frame_num in range(memory.num_frames):
            vpage_num = memory.get_frame_info(frame_num)
            if vpage_num is None:
                continue
            recency = page_table.get_entry(vpage_num).recency
            if recency > max_recency:
                max_recency = recency
                victim_frame = frame_num

        return victim_frame


class MRUPolicy(ReplacementPolicy):
    label = 'MRU'
    tracks_recency = True

    def select_victim(self, memory, page_table, future=()):
        victim_frame = 0
        min_recency = None

        for frame_num in range(memory.num_frames):
            vpage_num = memory.get_frame_info(frame_num)
            if vpage_num is None:
                continue
            recency = page_table.get_entry(vpage_num).recency
            if min_recency is None or recency < min_recency:
                min_recency = recency
                victim_frame = frame_num

        return victim_frame


class OptimalPolicy(ReplacementPolicy):
    """
    Belady's algorithm: replace the page referenced farthest in the future.

    `future` is the remainder of the trace after the current reference.
    Pages that never appear in it get a distance past the end of any real
    one, so they are evicted first.
    """
    label = 'OPT'
    needs_future = True
    NEVER_REFERENCED_PADDING = 100

    def select_victim(self, memory, page_table, future=()):
        resident = {}
        for frame_num in range(memory.num_frames):
            vpage_num = memory.get_frame_info(frame_num)
            if vpage_num is not None:
                resident[vpage_num] = frame_num

        # Distance to each resident page's next reference
        next_use = {}
        length = 0
        for distance, vpage_num in enumerate(future):
            length = distance + 1
            if vpage_num in resident and vpage_num not in next_use:
                next_use[vpage_num] = distance
                if len(next_use) == len(resident):
                    break
        # Past the end of the trace counts as never referenced again
        never = length + self.NEVER_REFERENCED_PADDING

        victim_frame = 0
        max_distance = -1
        for frame_num in range(memory.num_frames):
            vpage_num = memory.get_frame_info(frame_num)
            if vpage_num is None:
                distance = never
            else:
                distance = next_use.get(vpage_num, never)
            if distance > max_distance:
                max_distance = distance
                victim_frame = frame_num

        return victim_frame


class RandomUniformPolicy(ReplacementPolicy):
    """Scale a uniform draw in [0, 1) to a frame number."""
    label = 'RAN'

    def __init__(self, num_frames, rng=None):
        super().__init__(num_frames)
        self.rng = rng if rng is not None else random

    def select_victim(self, memory, page_table, future=()):
        return int(self.rng.random() * self.num_frames)


class RandomCongruentialPolicy(ReplacementPolicy):
    """
    Take a linear congruential draw modulo the frame count.

    Uses the classic C library constants; the state is seeded once from
    the shared generator so seeded runs stay reproducible.
    """
    label = 'RAN2'
    MULTIPLIER = 1103515245
    INCREMENT = 12345
    MODULUS_MASK = 0x7FFFFFFF

    def __init__(self, num_frames, rng=None):
        super().__init__(num_frames)
        rng = rng if rng is not None else random
        self.state = rng.getrandbits(31)

    def next_random(self):
        self.state = (self.state * self.MULTIPLIER + self.INCREMENT) & self.MODULUS_MASK
        return self.state

    def select_victim(self, memory, page_table, future=()):
        return self.next_random() % self.num_frames


POLICIES = {
    policy.label: policy
    for policy in (FIFOPolicy, LRUPolicy, MRUPolicy, OptimalPolicy,
                   RandomUniformPolicy, RandomCongruentialPolicy)
}

ALGORITHMS = list(POLICIES)


def make_policy(label, num_frames, rng=None):
    try:
        policy_class = POLICIES[label]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {label}") from None
    if policy_class in (RandomUniformPolicy, RandomCongruentialPolicy):
        return policy_class(num_frames, rng=rng)
    return policy_class(num_frames)
