"""
Exceptions raised by compressed-matrix operations.
"""


class DimensionMismatch(ValueError):
    """
    Two operands have incompatible shapes for multiplication: the number of
    columns of the left operand differs from the number of rows of the right.

    Attributes:
        left_shape(tuple): the shape of the left operand.
        right_shape(tuple): the shape of the right operand.
    """

    def __init__(self, left_shape, right_shape):
        self.left_shape = tuple(left_shape)
        self.right_shape = tuple(right_shape)
        lr, lc = self.left_shape
        rr, rc = self.right_shape
        super().__init__(
            f'cannot multiply {lr}x{lc} by {rr}x{rc}: '
            f'inner dimensions {lc} and {rr} differ'
        )

    def __reduce__(self):
        return (type(self), (self.left_shape, self.right_shape))


class AllocationFailure(MemoryError):
    "Storage for a product could not be allocated."
