import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from reference_string import create_reference_string
from replacement import ALGORITHMS
from simulator import MAX_FRAMES, MAX_PAGES, TRACE_LENGTH, run_all_policies

FRAME_COUNTS = [8, 16, 24, 32, 40, 48, 56, 64]


def sweep_frame_counts(references, frame_counts=FRAME_COUNTS, algorithms=ALGORITHMS,
                       num_pages=MAX_PAGES, random_seed=0):
    """Fault counts per algorithm for each frame count, on one trace."""
    faults = {}
    for num_frames in frame_counts:
        results = run_all_policies(references, algorithms=algorithms, num_frames=num_frames,
                                   num_pages=num_pages, random_seed=random_seed)
        faults[num_frames] = {alg: result.page_faults for alg, result in results.items()}
    return faults


def plot_fault_counts(faults, num_frames=MAX_FRAMES, filename='algorithm_comparison.png'):
    frame_counts = sorted(faults)
    algorithms = list(faults[frame_counts[0]])
    if num_frames not in faults:
        num_frames = frame_counts[-1]

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle('Page Replacement Algorithm Comparison', fontsize=14, fontweight='bold')

    ax = axes[0]
    x = range(len(algorithms))
    bars = ax.bar(x, [faults[num_frames][alg] for alg in algorithms], 0.6)
    for bar in bars:
        height = bar.get_height()
        ax.text(bar.get_x() + bar.get_width()/2., height,
                f'{int(height)}', ha='center', va='bottom', fontsize=9)
    ax.set_title(f'Page Faults ({num_frames} frames)')
    ax.set_xticks(x)
    ax.set_xticklabels(algorithms)
    ax.grid(axis='y', alpha=0.3)

    ax = axes[1]
    for alg in algorithms:
        ax.plot(frame_counts, [faults[n][alg] for n in frame_counts], marker='o', label=alg)
    ax.set_title('Page Faults vs. Frames')
    ax.set_xlabel('Frames')
    ax.set_ylabel('Page Faults')
    ax.grid(alpha=0.3)
    ax.legend(loc='upper right', ncol=2, frameon=True)

    plt.tight_layout()
    plt.savefig(filename, dpi=300, bbox_inches='tight')
    plt.close(fig)
    return filename


def main():
    print("Running simulations...")
    references = create_reference_string(TRACE_LENGTH, MAX_PAGES)
    faults = sweep_frame_counts(references)
    filename = plot_fault_counts(faults)
    print(f"\nGraph saved as '{filename}'")


if __name__ == '__main__':
    main()
