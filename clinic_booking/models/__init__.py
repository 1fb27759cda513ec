from .appointments import Appointments, Base, metadata

__all__ = ["Appointments", "Base", "metadata"]
