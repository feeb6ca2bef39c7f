#!/usr/bin/env python3
"""
GA Convergence Visualization
Plots per-generation distance statistics from a run history
"""

import logging
import os
from typing import Optional, Sequence

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .optimizer import GenerationResult

logger = logging.getLogger(__name__)

# Worst/best spread above this ratio switches the y axis to log scale
LOG_SCALE_RATIO = 100.0


def plot_convergence(history: Sequence[GenerationResult], output_path: str,
                     title: str = "GA Convergence",
                     theoretical_minimum: Optional[float] = None) -> str:
    """Save a best/average/worst distance plot for each generation

    Args:
        history: Generation records in order
        output_path: PNG file to write
        title: Plot title
        theoretical_minimum: Optional lower bound drawn as a reference line

    Returns:
        The path written
    """
    if not history:
        raise ValueError("Cannot plot an empty history")

    generations = np.array([gen.generation for gen in history])
    best = np.array([gen.best_distance for gen in history])
    average = np.array([gen.average_distance for gen in history])
    worst = np.array([gen.worst_distance for gen in history])

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(generations, best, color='#2E86AB', linewidth=2, label='Best')
    ax.plot(generations, average, color='#F18F01', linewidth=1.5, label='Average')
    ax.plot(generations, worst, color='#C73E1D', linewidth=1, alpha=0.6, label='Worst')

    if theoretical_minimum is not None:
        ax.axhline(theoretical_minimum, color='gray', linestyle='--', linewidth=1,
                   label='Lower bound')

    # Unreachable edges put the worst tours orders of magnitude above the best
    if best.min() > 0 and worst.max() / best.min() > LOG_SCALE_RATIO:
        ax.set_yscale('log')

    ax.set_xlabel('Generation')
    ax.set_ylabel('Total distance')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)

    logger.info(f"Convergence plot saved to {output_path}")
    return output_path
