import random

from generate_graphs import plot_fault_counts, sweep_frame_counts
from reference_string import create_reference_string


def test_sweep_and_plot(tmp_path):
    references = create_reference_string(120, 32, rng=random.Random(6))

    faults = sweep_frame_counts(references, frame_counts=[2, 4, 8], num_pages=32)

    assert sorted(faults) == [2, 4, 8]
    for counts in faults.values():
        assert counts['OPT'] == min(counts.values())
    # OPT is a stack algorithm: more frames never hurt it
    assert faults[2]['OPT'] >= faults[4]['OPT'] >= faults[8]['OPT']

    filename = plot_fault_counts(faults, num_frames=4, filename=str(tmp_path / 'faults.png'))
    assert (tmp_path / 'faults.png').stat().st_size > 0
    assert filename.endswith('faults.png')
