from .sockets import SocketTransport

__all__ = ["SocketTransport"]
