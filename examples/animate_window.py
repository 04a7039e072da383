"""
Animated mosaic in a matplotlib window. Resize the window to rebuild it.
"""
import logging

from hexmosaic import MosaicConfig
from hexmosaic._logging import setup_logging
from hexmosaic._plotting import animate_mosaic

setup_logging(logging.INFO)

config = MosaicConfig(radius=60, jump_cutoff=0.99)
fig, ax, scheduler = animate_mosaic(config=config, seed=3, figsize=(10, 6),
                                    show=True)
