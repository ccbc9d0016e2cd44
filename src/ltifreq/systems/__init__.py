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
LTI system representations and their pole/zero structure.
"""

from .lti import (
    LTISystem,
    SisoRational,
    StateSpace,
    TransferFunction,
    check_consistent_sampling_time,
    iscontinuous,
    isdiscrete,
    issiso,
    isstable,
    ninputs,
    noutputs,
    numeric_type,
    ss,
    tf,
)
from .zeros_poles import pole, transmission_zeros, tzero, zpkdata

__all__ = [
    "LTISystem",
    "StateSpace",
    "SisoRational",
    "TransferFunction",
    "ss",
    "tf",
    "ninputs",
    "noutputs",
    "numeric_type",
    "iscontinuous",
    "isdiscrete",
    "issiso",
    "isstable",
    "check_consistent_sampling_time",
    "pole",
    "tzero",
    "zpkdata",
    "transmission_zeros",
]
