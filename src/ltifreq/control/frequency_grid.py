# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Automatic Frequency Grid Selection

Chooses a logarithmic frequency vector covering the dynamics of one or more
LTI systems when the caller does not supply one.

Algorithm (per system)
----------------------
1. Features: channel zeros and poles with Im >= 0 (bode, nyquist), or the
   multivariable transmission zeros and poles (sigma).
2. Feature frequencies f = log10|p|; values at or below -4 are ignored.
3. No features left: bounds [0, 2] (1 to 100 rad/s).
   Otherwise: [floor(min f - 0.2), ceil(max f + 0.2)], widened by one
   decade on each side for nyquist.
4. Discrete systems: the upper bound is clamped to log10(π/Ts).

Across systems the lowest lower bound and highest upper bound are used.
The grid has max(200, 60 * decades) points.

Usage
-----
>>> from ltifreq.control.frequency_grid import default_freq_vector
>>> w = default_freq_vector(sys, "bode")
>>> w = default_freq_vector([sys1, sys2], "nyquist")
"""

import warnings
from typing import Optional, Sequence, Union

import numpy as np

from ltifreq.control.frequency_response import sampling_period
from ltifreq.systems.lti import LTISystem, TransferFunction, iscontinuous, issiso
from ltifreq.systems.zeros_poles import pole, tzero, zpkdata
from ltifreq.types.backends import VALID_PLOT_TYPES, PlotType
from ltifreq.types.core import FeatureVector, FrequencyVector
from ltifreq.types.frequency_domain import (
    DEFAULT_GRID_CONFIG,
    FrequencyBounds,
    FrequencyGridConfig,
)


def _validate_plot_type(plot: str) -> None:
    if plot not in VALID_PLOT_TYPES:
        raise ValueError(f"plot must be one of {VALID_PLOT_TYPES}, got '{plot}'")


def _merge_config(config: Optional[FrequencyGridConfig]) -> FrequencyGridConfig:
    """Fill missing settings from DEFAULT_GRID_CONFIG."""
    if config is None:
        return dict(DEFAULT_GRID_CONFIG)
    unknown = set(config) - set(DEFAULT_GRID_CONFIG)
    if unknown:
        raise ValueError(f"Unknown grid settings: {sorted(unknown)}")
    merged = dict(DEFAULT_GRID_CONFIG)
    merged.update(config)
    return merged


def _channel_features(sys: LTISystem) -> FeatureVector:
    """All channel zeros followed by all channel poles, upper half-plane only."""
    zs, ps, _ = zpkdata(sys)
    zp = np.concatenate(
        [np.zeros(0, dtype=complex)]
        + [z for row in zs for z in row]
        + [p for row in ps for p in row]
    )
    return zp[zp.imag >= 0.0]


def _multivariable_features(sys: LTISystem) -> FeatureVector:
    """Transmission zeros followed by poles."""
    if isinstance(sys, TransferFunction) and not issiso(sys):
        # No transmission zeros without a realization; use the channel zeros
        zs, _, _ = zpkdata(sys)
        zeros = np.concatenate([np.zeros(0, dtype=complex)] + [z for row in zs for z in row])
    else:
        zeros = tzero(sys)
    return np.concatenate([zeros.astype(complex), pole(sys).astype(complex)])


def bounds_and_features(
    sys: LTISystem,
    plot: PlotType,
    config: Optional[FrequencyGridConfig] = None,
) -> FrequencyBounds:
    """
    Frequency bounds (log10 rad/s) for a single system.

    Args:
        sys: LTI system
        plot: 'bode', 'nyquist' or 'sigma'
        config: Optional partial grid settings

    Returns:
        FrequencyBounds with lower/upper log10 bounds and the features
        considered

    Raises:
        ValueError: If plot or config is invalid
    """
    _validate_plot_type(plot)
    settings = _merge_config(config)

    if plot == "sigma":
        zp = _multivariable_features(sys)
    else:
        zp = _channel_features(sys)

    # Ignore low-frequency dynamics (and exact zeros, log10(0) = -inf)
    with np.errstate(divide="ignore"):
        fzp = np.log10(np.abs(zp))
    fzp = np.sort(fzp[fzp > settings["feature_floor"]])

    if fzp.size:
        w1 = np.floor(fzp[0] - settings["bound_margin"])
        w2 = np.ceil(fzp[-1] + settings["bound_margin"])
        if plot == "nyquist":
            w1 -= settings["nyquist_expansion"]
            w2 += settings["nyquist_expansion"]
    else:
        w1, w2 = settings["default_bounds"]

    if not iscontinuous(sys):
        # Nothing to show above the Nyquist frequency
        w2 = min(w2, np.log10(np.pi / sampling_period(sys)))
        if w2 <= w1:
            warnings.warn(
                f"Nyquist frequency clamp leaves an empty frequency range "
                f"[10^{w1:g}, 10^{w2:g}] rad/s for Ts={sys.Ts}",
                UserWarning,
                stacklevel=2,
            )

    return {"lower": float(w1), "upper": float(w2), "features": zp}


def default_freq_vector(
    systems: Union[LTISystem, Sequence[LTISystem]],
    plot: PlotType,
    config: Optional[FrequencyGridConfig] = None,
) -> FrequencyVector:
    """
    Logarithmic frequency vector covering the dynamics of all systems.

    Args:
        systems: One LTI system or a sequence of them
        plot: 'bode', 'nyquist' or 'sigma'
        config: Optional partial grid settings, e.g.
            {'min_points_per_decade': 100}

    Returns:
        Frequencies in rad/s, 10 ** linspace(lower, upper, nw) with
        nw = max(min_points_total, min_points_per_decade * decades)

    Raises:
        ValueError: If no system is given, or plot/config is invalid

    Examples
    --------
    >>> sys = tf([10], [1, 11, 10])          # poles at -1 and -10
    >>> w = default_freq_vector(sys, "bode")
    >>> w[0], w[-1], len(w)
    (0.1, 100.0, 200)
    """
    if isinstance(systems, LTISystem):
        systems = [systems]
    systems = list(systems)
    if not systems:
        raise ValueError("default_freq_vector requires at least one system")

    settings = _merge_config(config)
    bounds = [bounds_and_features(sys, plot, settings) for sys in systems]
    w1 = min(b["lower"] for b in bounds)
    w2 = max(b["upper"] for b in bounds)

    nw = int(round(max(settings["min_points_total"], settings["min_points_per_decade"] * (w2 - w1))))
    return 10.0 ** np.linspace(w1, w2, nw)
