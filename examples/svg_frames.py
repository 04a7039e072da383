"""
Write every 25th frame of a headless run to numbered SVG files.
"""
from hexmosaic import AnimationScheduler, FixedViewport, SvgBackend

backend = SvgBackend()
scheduler = AnimationScheduler(FixedViewport(640, 480), backend=backend,
                               seed=7)
scheduler.start()

for frame in range(200):
    scheduler.timer.run_next()
    if frame % 25 == 0:
        backend.save(f"frame_{frame:03d}.svg")

print(f"Final interval {scheduler.interval:.1f} ms")
