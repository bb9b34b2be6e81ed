"""Training helpers built on :class:`circuitnet.core.network.Network`."""
