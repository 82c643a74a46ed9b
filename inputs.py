# inputs.py
"""
Synthetic labelled sensor patterns and a presentation schedule for the teaching demo.

- Each pattern is a vector over the sensory channels: a random subset of on-channels at 1.0,
  everything else at 0.0; pairwise overlap between patterns is kept at or below max_overlap
  when that is achievable.
- A frame adds uniform noise in [0, noise_level) and clips into [0, 1].
- The schedule is a list of segments: 'rest' (noise only, teaching sensors silent) between
  'pattern' presentations, pattern order shuffled per epoch.
"""
import numpy as np

_MAX_TRIES = 1000


def make_patterns(n_patterns, n_channels, on_fraction, rng, max_overlap=None):
    """Return dict label -> pattern vector; labels are '0', '1', ..."""
    k = min(n_channels, max(1, int(round(on_fraction * n_channels))))
    chosen = []
    for _ in range(n_patterns):
        for _attempt in range(_MAX_TRIES):
            on = set(rng.choice(n_channels, k, replace=False).tolist())
            if max_overlap is None or all(len(on & prev) <= max_overlap for prev in chosen):
                break
        chosen.append(on)
    patterns = {}
    for i, on in enumerate(chosen):
        vec = np.zeros(n_channels, dtype=np.float64)
        vec[sorted(on)] = 1.0
        patterns[str(i)] = vec
    return patterns


def frame(pattern, noise_level, rng):
    noise = rng.random(pattern.shape[0]) * noise_level
    return np.clip(pattern + noise, 0.0, 1.0)


def build_schedule(labels, pattern_cycles, rest_cycles, epochs, rng):
    """
    Returns a list of segments for the whole run:
    Each segment: dict(kind='rest'|'pattern', label=..., cycles=int)
    """
    out = []
    labels = list(labels)
    for _ in range(epochs):
        for idx in rng.permutation(len(labels)):
            if rest_cycles > 0:
                out.append(dict(kind="rest", label=None, cycles=rest_cycles))
            out.append(dict(kind="pattern", label=labels[idx], cycles=pattern_cycles))
    if rest_cycles > 0:
        out.append(dict(kind="rest", label=None, cycles=rest_cycles))
    return out
