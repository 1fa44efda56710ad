from talent_dispatch.repository.base import BookingRepository
from talent_dispatch.repository.memory import InMemoryRepository, seed_demo_data
from talent_dispatch.repository.rest import RestRepository

__all__ = ["BookingRepository", "InMemoryRepository", "RestRepository", "seed_demo_data"]
