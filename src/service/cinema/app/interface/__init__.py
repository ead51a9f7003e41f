"""Application layer interfaces (Ports)"""

from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.app.interface.i_snapshot_repo import ISnapshotRepo, StoreState

__all__ = ['IPasswordHasher', 'ISnapshotRepo', 'StoreState']
