"""Cinema Domain Value Objects"""

from src.service.cinema.domain.value_object.payment_details import PaymentDetails
from src.service.cinema.domain.value_object.seat import Seat

__all__ = ['PaymentDetails', 'Seat']
