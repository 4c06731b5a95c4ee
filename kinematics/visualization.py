"""
Visualization Engine
====================
Plots for kinematic trajectories:
  1. Trajectory (height vs distance) or a placeholder when nothing can be drawn
  2. Mode / parameter comparison on shared axes
  3. Dashboard with key metrics
  4. Validation comparison plots
  5. Animated trajectory (saved as GIF)
"""

import logging
import os
from typing import Dict, Optional

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec

from .calculator import TrajectoryResult
from .parameters import PROJECTILE
from .replay import TrajectoryReplay, DEFAULT_DURATION


logger = logging.getLogger(__name__)

# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
    'font_family': 'monospace',
}

PLACEHOLDER_TEXT = 'Enter parameters and run the simulation to see results'
UNRENDERABLE_TEXT = 'Trajectory cannot be rendered: result is not finite'

# Axes extend 10% past the trajectory
AXIS_MARGIN = 1.1


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _legend(ax, **kwargs):
    ax.legend(facecolor='#1a1a1a', edgecolor='#444',
              labelcolor=STYLE['text_color'], **kwargs)


def _save(fig, save_path):
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


def is_renderable(result: Optional[TrajectoryResult]) -> bool:
    """A result can be drawn once it exists, is finite and has samples."""
    return result is not None and bool(result.samples) and result.is_finite


def _axis_limits(result: TrajectoryResult):
    # Free-fall has zero distance; keep a visible horizontal extent
    x_max = result.distance * AXIS_MARGIN or 1.0
    y_max = result.max_height * AXIS_MARGIN or 1.0
    return x_max, y_max


# ══════════════════════════════════════════════════════════════════════════
#  1. Single Trajectory Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_placeholder(message: str = PLACEHOLDER_TEXT, save_path: str = None) -> plt.Figure:
    """Neutral figure shown before any result exists."""
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)
    ax.set_xticks([])
    ax.set_yticks([])
    ax.grid(False)
    ax.text(0.5, 0.5, message, ha='center', va='center', transform=ax.transAxes,
            color='#888888', fontsize=13, fontfamily=STYLE['font_family'])
    _save(fig, save_path)
    return fig


def plot_trajectory(result: Optional[TrajectoryResult], save_path: str = None,
                    show: bool = False) -> plt.Figure:
    """Height vs distance for a single trajectory."""
    if result is None:
        return plot_placeholder(PLACEHOLDER_TEXT, save_path)
    if not is_renderable(result):
        logger.warning("Refusing to plot non-finite trajectory (T=%s)", result.time_of_flight)
        return plot_placeholder(UNRENDERABLE_TEXT, save_path)

    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    ax.plot(result.x, result.y, color=STYLE['accent_colors'][0], linewidth=2.5,
            marker='.', markersize=4, label=result.mode)

    # Mark launch, apex and impact
    ax.plot(result.x[0], result.y[0], 'o', color='#00e676', markersize=10,
            label='Launch', zorder=5)
    apex = result.apex
    ax.plot(apex.x, apex.y, '^', color='#ffeb3b', markersize=10,
            label='Apex', zorder=5)
    ax.plot(result.x[-1], result.y[-1], 'x', color='#ff5252', markersize=12,
            markeredgewidth=3, label='Impact', zorder=5)

    ax.set_xlabel('Distance (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    title = f'Trajectory — {result.mode}'
    if result.parameters is not None:
        p = result.parameters
        title += (f' (v₀={p.initial_velocity:.1f} m/s, θ={p.angle:.0f}°, '
                  f'h₀={p.initial_height:.1f} m)')
    ax.set_title(title, fontsize=13, fontweight='bold')
    _legend(ax, loc='upper right', fontsize=10)

    x_max, y_max = _axis_limits(result)
    ax.set_xlim(0, x_max)
    ax.set_ylim(0, y_max)

    plt.tight_layout()
    _save(fig, save_path)
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_mode_comparison(results: Dict[str, TrajectoryResult],
                         save_path: str = None) -> plt.Figure:
    """Several labelled trajectories on shared axes, plus height vs time."""
    fig, axes = plt.subplots(1, 2, figsize=(16, 6))
    _apply_dark_style(fig, axes)

    colors = STYLE['accent_colors']
    for i, (label, res) in enumerate(results.items()):
        if not is_renderable(res):
            logger.warning("Skipping non-finite trajectory %r", label)
            continue
        color = colors[i % len(colors)]
        axes[0].plot(res.x, res.y, color=color, linewidth=2, label=label)
        axes[1].plot(res.time, res.y, color=color, linewidth=2, label=label)

    axes[0].set_xlabel('Distance (m)')
    axes[0].set_ylabel('Height (m)')
    axes[0].set_title('Trajectory Comparison', fontweight='bold')
    axes[0].set_ylim(bottom=0)
    _legend(axes[0], fontsize=9)

    axes[1].set_xlabel('Time (s)')
    axes[1].set_ylabel('Height (m)')
    axes[1].set_title('Height vs Time', fontweight='bold')
    axes[1].set_ylim(bottom=0)

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Dashboard
# ══════════════════════════════════════════════════════════════════════════

def plot_dashboard(result: TrajectoryResult, save_path: str = None) -> plt.Figure:
    """Trajectory + metrics panel + position components over time."""
    if not is_renderable(result):
        return plot_trajectory(result, save_path=save_path)

    fig = plt.figure(figsize=(16, 9))
    fig.patch.set_facecolor(STYLE['bg_color'])
    gs = gridspec.GridSpec(2, 3, figure=fig, hspace=0.35, wspace=0.3)

    # ── Trajectory (top, spans 2 cols) ──
    ax1 = fig.add_subplot(gs[0, :2])
    _apply_dark_style(fig, ax1)
    ax1.plot(result.x, result.y, color='#00d4ff', linewidth=2.5)
    apex = result.apex
    ax1.plot(apex.x, apex.y, '^', color='#ffeb3b', markersize=12)
    ax1.plot(result.x[-1], 0, 'x', color='#ff5252', markersize=14, markeredgewidth=3)
    ax1.set_xlabel('Distance (m)')
    ax1.set_ylabel('Height (m)')
    ax1.set_title('TRAJECTORY', fontweight='bold', fontsize=13)
    x_max, y_max = _axis_limits(result)
    ax1.set_xlim(0, x_max)
    ax1.set_ylim(0, y_max)

    # ── Metrics panel (top-right) ──
    ax_info = fig.add_subplot(gs[0, 2])
    ax_info.set_facecolor('#111111')
    ax_info.axis('off')

    metrics = [
        ('MODE', result.mode.upper()),
        ('MAX HEIGHT', f'{result.max_height:.2f} m'),
        ('DISTANCE', f'{result.distance:.2f} m'),
        ('FLIGHT TIME', f'{result.time_of_flight:.2f} s'),
        ('SAMPLES', f'{len(result.samples)}'),
    ]
    if result.parameters is not None:
        p = result.parameters
        metrics.insert(1, ('LAUNCH', f'{p.initial_velocity:.1f} m/s @ {p.angle:.0f}°'))

    for i, (label, value) in enumerate(metrics):
        y_pos = 0.92 - i * 0.15
        ax_info.text(0.05, y_pos, label, fontsize=10, fontweight='bold',
                     color='#888888', transform=ax_info.transAxes, fontfamily='monospace')
        ax_info.text(0.95, y_pos, value, fontsize=11, fontweight='bold',
                     color='#00d4ff', transform=ax_info.transAxes,
                     ha='right', fontfamily='monospace')
    ax_info.set_title('FLIGHT DATA', fontweight='bold',
                      color=STYLE['text_color'], fontsize=13, pad=10)

    # ── Height vs time ──
    ax2 = fig.add_subplot(gs[1, 0])
    _apply_dark_style(fig, ax2)
    ax2.plot(result.time, result.y, color='#ffeb3b', linewidth=2)
    ax2.axhline(y=result.max_height, color='#ff5252', linestyle='--', alpha=0.5)
    ax2.set_xlabel('Time (s)')
    ax2.set_ylabel('Height (m)')
    ax2.set_title('HEIGHT', fontweight='bold')

    # ── Distance vs time ──
    ax3 = fig.add_subplot(gs[1, 1])
    _apply_dark_style(fig, ax3)
    ax3.plot(result.time, result.x, color='#ff6b35', linewidth=2)
    ax3.set_xlabel('Time (s)')
    ax3.set_ylabel('Distance (m)')
    ax3.set_title('DISTANCE', fontweight='bold')

    # ── Sample spacing ──
    ax4 = fig.add_subplot(gs[1, 2])
    _apply_dark_style(fig, ax4)
    if len(result.samples) > 1:
        ax4.step(result.time[1:], np.diff(result.time), color='#e040fb', linewidth=2)
    ax4.set_xlabel('Time (s)')
    ax4.set_ylabel('Δt (s)')
    ax4.set_title('SAMPLE SPACING', fontweight='bold')

    fig.suptitle('KINEMATICS DASHBOARD', fontsize=16, fontweight='bold',
                 color='#00d4ff', y=0.98)
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Validation Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_validation(validation_results, save_path: str = None) -> plt.Figure:
    """Computed vs closed-form distance and height across the angle sweep."""
    projectile = [v for v in validation_results if v.parameters.mode == PROJECTILE]

    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    _apply_dark_style(fig, axes)

    angles = [v.parameters.angle for v in projectile]

    ax = axes[0]
    ax.plot(angles, [v.ref_distance for v in projectile], 'o-', color='#ffeb3b',
            linewidth=2, markersize=8, label='Closed form')
    ax.plot(angles, [v.sim_distance for v in projectile], 's--', color='#00d4ff',
            linewidth=2, markersize=8, label='Calculator')
    ax.plot(angles, [v.ref_max_height for v in projectile], 'o-', color='#ff6b35',
            linewidth=1.5, markersize=6, label='Closed form (height)')
    ax.plot(angles, [v.sim_max_height for v in projectile], 's--', color='#e040fb',
            linewidth=1.5, markersize=6, label='Calculator (height)')
    ax.set_xlabel('Launch Angle (°)')
    ax.set_ylabel('Metres')
    ax.set_title('Distance & Max Height', fontweight='bold')
    _legend(ax, fontsize=10)

    ax = axes[1]
    errors = [v.height_error_pct for v in projectile]
    colors = ['#00e676' if abs(e) < 1 else '#ff5252' for e in errors]
    ax.bar(angles, errors, color=colors, alpha=0.8, width=4)
    ax.axhline(y=0, color='#888', linewidth=0.5)
    ax.axhspan(-1, 1, alpha=0.05, color='#00e676')
    ax.set_xlabel('Launch Angle (°)')
    ax.set_ylabel('Max Height Error (%)')
    ax.set_title('Sampling Error', fontweight='bold')

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  5. Animated Trajectory (GIF)
# ══════════════════════════════════════════════════════════════════════════

def create_trajectory_animation(result: TrajectoryResult,
                                save_path: str = 'outputs/trajectory_anim.gif',
                                frames: int = 60,
                                duration: float = DEFAULT_DURATION) -> Optional[str]:
    """Animated GIF that replays the trajectory over ``duration`` seconds."""
    from matplotlib.animation import FuncAnimation, PillowWriter

    if not is_renderable(result):
        logger.warning("No renderable trajectory, animation skipped")
        return None

    replay = TrajectoryReplay(result, duration=duration, frame_count=frames)
    prefixes = list(replay)

    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    x_max, y_max = _axis_limits(result)
    ax.set_xlim(0, x_max)
    ax.set_ylim(0, y_max)
    ax.set_xlabel('Distance (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title(f'Trajectory Animation — {result.mode}', fontsize=14, fontweight='bold')

    trail_line, = ax.plot([], [], color='#00d4ff', linewidth=2)
    point, = ax.plot([], [], 'o', color='#1e88e5', markersize=10)
    time_text = ax.text(0.80, 0.95, '', transform=ax.transAxes,
                        color=STYLE['text_color'], fontsize=11, fontfamily='monospace')

    def animate(frame_idx):
        prefix = prefixes[frame_idx]
        trail_line.set_data([s.x for s in prefix], [s.y for s in prefix])
        if prefix:
            current = prefix[-1]
            point.set_data([current.x], [current.y])
            time_text.set_text(f'Time: {current.t:.1f} s')
        else:
            point.set_data([], [])
            time_text.set_text('')
        return trail_line, point, time_text

    fps = max(1, round(len(prefixes) / duration))
    anim = FuncAnimation(fig, animate, frames=len(prefixes),
                         interval=1000.0 / fps, blit=True)
    anim.save(save_path, writer=PillowWriter(fps=fps),
              savefig_kwargs={'facecolor': STYLE['bg_color']})
    plt.close(fig)
    logger.info("Animation saved: %s", save_path)
    return save_path
