import attrs


@attrs.define(frozen=True)
class PaymentDetails:
    """Opaque card fields captured with a booking (stored, never validated)"""

    card_number: str = attrs.field(default='', repr=False)
    expiry: str = attrs.field(default='', repr=False)
    cvv: str = attrs.field(default='', repr=False)

    @property
    def masked_card_number(self) -> str:
        return f'****{self.card_number[-4:]}' if self.card_number else ''
