"""Guest cart aggregate: the cart of a visitor who has not signed in.

One aggregate per device/session, identified by the session id. Lines are
unique by product and never hold a quantity below one; lowering a quantity
to zero removes the line instead. Prices and stock are not known here, they
are checked by the server when the lines are merged or checked out.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer

from cart.domain import cart


@cart.entity(part_of="GuestCart")
class GuestCartLine:
    product_id = Integer(required=True)
    quantity = Integer(required=True, min_value=1)


@cart.aggregate
class GuestCart:
    lines = HasMany(GuestCartLine)
    updated_at = DateTime()

    @invariant.post
    def lines_must_be_unique_by_product(self):
        product_ids = [line.product_id for line in self.lines]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"lines": ["A product can only appear once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id):
        return cls(id=session_id, updated_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def _line_for(self, product_id):
        return next((line for line in self.lines if line.product_id == product_id), None)

    def add_product(self, product_id, quantity):
        """Add a product, or increase its quantity if it is already in the cart."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self._line_for(product_id)
        if existing:
            existing.quantity += quantity
        else:
            self.add_lines(GuestCartLine(product_id=product_id, quantity=quantity))

        self.updated_at = datetime.now(UTC)

    def set_product_quantity(self, product_id, quantity):
        """Replace a line's quantity. Zero or less removes the line."""
        existing = self._line_for(product_id)
        if existing is None:
            return

        if quantity <= 0:
            self.remove_lines(existing)
        else:
            existing.quantity = quantity

        self.updated_at = datetime.now(UTC)

    def remove_product(self, product_id):
        existing = self._line_for(product_id)
        if existing is None:
            return

        self.remove_lines(existing)
        self.updated_at = datetime.now(UTC)

    def clear_lines(self):
        for line in list(self.lines):
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

    def total_quantity(self):
        return sum(line.quantity for line in self.lines)
