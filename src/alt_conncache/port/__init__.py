from alt_conncache.port.connection_port import ReusableConnection

__all__ = ["ReusableConnection"]
