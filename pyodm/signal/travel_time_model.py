# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Factory of signal travel time computers sharing one configuration"""

from typing import Optional

from ..config import SignalTravelTimeConfig
from .travel_time import SignalTravelTimeAdjustableEmitter, SignalTravelTimeAdjustableReceiver


class SignalTravelTimeModel:
    """
    Signal propagation model.

    Parameters
    ----------
    config : SignalTravelTimeConfig, optional
        Speed and iteration settings, light speed in vacuum by default
    """

    def __init__(self, config: Optional[SignalTravelTimeConfig] = None):
        self.config = config if config is not None else SignalTravelTimeConfig()

    @classmethod
    def instantaneous(cls) -> "SignalTravelTimeModel":
        """Model with infinite signal speed (zero delays)"""
        return cls(SignalTravelTimeConfig.instantaneous())

    @property
    def signal_speed(self) -> float:
        return self.config.signal_speed

    def is_instantaneous(self) -> bool:
        return self.config.is_instantaneous

    def get_adjustable_emitter_computer(self, emitter) -> SignalTravelTimeAdjustableEmitter:
        return SignalTravelTimeAdjustableEmitter(emitter, self.config)

    def get_adjustable_receiver_computer(self, receiver) -> SignalTravelTimeAdjustableReceiver:
        return SignalTravelTimeAdjustableReceiver(receiver, self.config)
