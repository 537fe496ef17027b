"""Settings for predicate evaluation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PredicateSettings:
    """
    Settings that influence how predicates are evaluated.

    Attributes:
        online_probe_url: Endpoint contacted by the ``net online`` predicate
        probe_timeout: Upper bound in seconds for the ``net online`` probe
        port_open_timeout_ms: Default timeout in milliseconds for ``net port-open``
    """
    online_probe_url: str = "https://1.1.1.1/"
    probe_timeout: float = 3.0
    port_open_timeout_ms: int = 1000

    @classmethod
    def create_default(cls, probe_timeout: float | None = None) -> "PredicateSettings":
        """
        Create settings with compiled-in defaults.

        Args:
            probe_timeout: Optional override for the network probe timeout in seconds

        Returns:
            Settings instance

        Raises:
            ValueError: If the probe timeout is not a positive number
        """
        if probe_timeout is None:
            return cls()

        if not probe_timeout > 0:
            raise ValueError(f"Probe timeout must be positive, got {probe_timeout}")

        return cls(probe_timeout=probe_timeout)
