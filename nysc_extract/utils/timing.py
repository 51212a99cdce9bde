from __future__ import annotations


def fmt_duration(seconds: float) -> str:
    """Format durations with adaptive units: μs, ms, s, or m:s."""
    try:
        s = float(seconds)
    except (TypeError, ValueError):
        return "-"
    if s < 1e-6:
        return f"{s * 1e9:.0f} ns"
    if s < 1e-3:
        return f"{s * 1e6:.1f} μs"
    if s < 1:
        return f"{s * 1e3:.1f} ms"
    if s < 60:
        return f"{s:.3f} s"
    m, r = divmod(s, 60)
    if m < 60:
        return f"{int(m)}m {r:.1f}s"
    h, m = divmod(int(m), 60)
    return f"{h}h {m}m {r:.0f}s"
