"""DeviceLookup abstract interface.

The MBO aggregator only needs two things from the Conch API: the hardware
product catalog and individual device records. Anything implementing this
interface can feed it, which keeps the aggregator testable without a server.
"""

from abc import ABC, abstractmethod

from conch_shell.models.device import Device, HardwareProduct


class DeviceLookup(ABC):
    """Read-only source of devices and hardware products."""

    @abstractmethod
    def get_device(self, serial: str) -> Device:
        """Fetch one device, including its resolved location.

        Raises:
            ConchError: the device could not be resolved.
        """
        ...

    @abstractmethod
    def get_hardware_products(self) -> list[HardwareProduct]:
        """Fetch the full hardware product catalog."""
        ...
