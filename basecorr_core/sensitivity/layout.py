"""
Packed sensitivity blocks for base correlation derivatives.

A sensitivity block stores, for every name of a basket and in basket order,
the derivatives of an implied base correlation with respect to that name's
raw survival curve ordinates:

    [ gradient (K) | hessian (K(K+1)/2) | default jump (1) | recovery (1) ]

where K is the number of ordinates of the name's survival curve. The Hessian
is stored once per symmetric pair, row by row: (0,0), (1,0), (1,1), (2,0)...
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from basecorr_core._types import FloatArray
from basecorr_core.errors import PreconditionViolation


@dataclass(frozen=True)
class SensitivityLayout:
    """
    Offsets of each name's derivatives inside a packed block.

    Attributes
    ----------
    curve_lengths : tuple[int, ...]
        Number of survival curve ordinates K_i of each name

    Example
    -------
    >>> layout = SensitivityLayout((2, 3))
    >>> layout.stride(0), layout.stride(1), layout.size
    (7, 11, 18)
    """

    curve_lengths: tuple[int, ...]
    _offsets: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate curve lengths and compute per-name offsets."""
        lengths = tuple(int(k) for k in self.curve_lengths)
        if len(lengths) == 0:
            raise PreconditionViolation("Basket must contain at least one name")
        for i, (k, raw) in enumerate(zip(lengths, self.curve_lengths)):
            if k != raw or k < 1:
                raise PreconditionViolation(
                    f"Curve length of name {i} must be a positive integer, got {raw}"
                )
        object.__setattr__(self, "curve_lengths", lengths)

        offsets = [0]
        for k in lengths:
            offsets.append(offsets[-1] + self.stride_for(k))
        object.__setattr__(self, "_offsets", tuple(offsets))

    @staticmethod
    def stride_for(k: int) -> int:
        """Number of entries a name with K curve ordinates occupies."""
        return k + k * (k + 1) // 2 + 2

    @staticmethod
    def packed_index(j: int, k: int) -> int:
        """Position of Hessian entry (j, k) inside a name's packed Hessian."""
        if k > j:
            j, k = k, j
        return j * (j + 1) // 2 + k

    @property
    def n_names(self) -> int:
        """Number of names in the basket."""
        return len(self.curve_lengths)

    @property
    def size(self) -> int:
        """Total length of a block with this layout."""
        return self._offsets[-1]

    def _check_name(self, i: int) -> None:
        if not 0 <= i < self.n_names:
            raise PreconditionViolation(
                f"Name index {i} is out of range for a basket of {self.n_names}"
            )

    def curve_length(self, i: int) -> int:
        """Number of curve ordinates K_i of name i."""
        self._check_name(i)
        return self.curve_lengths[i]

    def stride(self, i: int) -> int:
        """Number of entries name i occupies."""
        return self.stride_for(self.curve_length(i))

    def offset(self, i: int) -> int:
        """Start of name i inside the block."""
        self._check_name(i)
        return self._offsets[i]

    def hessian_size(self, i: int) -> int:
        """Number of packed Hessian entries of name i."""
        k = self.curve_length(i)
        return k * (k + 1) // 2

    def gradient_slice(self, i: int) -> slice:
        """Slice of the gradient of name i."""
        start = self.offset(i)
        return slice(start, start + self.curve_lengths[i])

    def hessian_slice(self, i: int) -> slice:
        """Slice of the packed Hessian of name i."""
        start = self.gradient_slice(i).stop
        return slice(start, start + self.hessian_size(i))

    def default_jump_index(self, i: int) -> int:
        """Position of the default jump entry of name i."""
        return self.hessian_slice(i).stop

    def recovery_index(self, i: int) -> int:
        """Position of the recovery derivative entry of name i."""
        return self.hessian_slice(i).stop + 1


@dataclass(frozen=True, eq=False)
class SensitivityBlock:
    """
    Length-checked flat array of correlation derivatives for a basket.

    The values are copied on construction and exposed read-only, so a block
    can be shared between results without risk of aliasing.

    Attributes
    ----------
    layout : SensitivityLayout
        Packing of the basket names
    values : FloatArray
        Flat array of length ``layout.size``

    Example
    -------
    >>> layout = SensitivityLayout((2,))
    >>> block = SensitivityBlock.from_components(
    ...     layout,
    ...     gradients=[[0.1, 0.2]],
    ...     hessians=[[[1.0, 0.5], [0.5, 2.0]]],
    ...     default_jumps=[0.03],
    ...     recovery_derivatives=[-0.01],
    ... )
    >>> block.hessian_packed(0)
    array([1. , 0.5, 2. ])
    """

    layout: SensitivityLayout
    values: FloatArray

    def __post_init__(self) -> None:
        """Validate the block length against the layout."""
        arr = np.array(self.values, dtype=np.float64)
        if arr.ndim != 1:
            raise PreconditionViolation(
                f"Sensitivity values must be one-dimensional, got shape {arr.shape}"
            )
        if arr.shape[0] != self.layout.size:
            raise PreconditionViolation(
                f"Sensitivity block has length {arr.shape[0]}, expected "
                f"{self.layout.size} for curve lengths {self.layout.curve_lengths}"
            )
        arr.flags.writeable = False
        object.__setattr__(self, "values", arr)

    def __len__(self) -> int:
        return self.values.shape[0]

    @classmethod
    def zeros(cls, layout: SensitivityLayout) -> "SensitivityBlock":
        """Block of zeros for the given layout."""
        return cls(layout, np.zeros(layout.size))

    @classmethod
    def from_components(
        cls,
        layout: SensitivityLayout,
        gradients: Sequence[Sequence[float]],
        hessians: Sequence[Sequence[float] | Sequence[Sequence[float]]],
        default_jumps: Sequence[float],
        recovery_derivatives: Sequence[float],
    ) -> "SensitivityBlock":
        """
        Pack per-name derivatives into a block.

        Parameters
        ----------
        layout : SensitivityLayout
            Target layout
        gradients : Sequence
            Gradient of each name, length K_i
        hessians : Sequence
            Hessian of each name, either a full symmetric K_i x K_i matrix
            (the lower triangle is packed) or an already packed array
        default_jumps : Sequence[float]
            Jump-to-default value of each name
        recovery_derivatives : Sequence[float]
            Recovery rate derivative of each name

        Returns
        -------
        SensitivityBlock
            Packed block
        """
        n = layout.n_names
        for label, seq in [
            ("gradients", gradients),
            ("hessians", hessians),
            ("default_jumps", default_jumps),
            ("recovery_derivatives", recovery_derivatives),
        ]:
            if len(seq) != n:
                raise PreconditionViolation(
                    f"Expected {n} {label}, got {len(seq)}"
                )

        values = np.empty(layout.size)
        for i in range(n):
            k = layout.curve_lengths[i]
            grad = np.asarray(gradients[i], dtype=np.float64)
            if grad.shape != (k,):
                raise PreconditionViolation(
                    f"Gradient of name {i} must have shape ({k},), got {grad.shape}"
                )
            hess = np.asarray(hessians[i], dtype=np.float64)
            if hess.ndim == 2:
                if hess.shape != (k, k):
                    raise PreconditionViolation(
                        f"Hessian of name {i} must have shape ({k}, {k}), "
                        f"got {hess.shape}"
                    )
                hess = hess[np.tril_indices(k)]
            elif hess.shape != (layout.hessian_size(i),):
                raise PreconditionViolation(
                    f"Packed Hessian of name {i} must have length "
                    f"{layout.hessian_size(i)}, got {hess.shape}"
                )
            values[layout.gradient_slice(i)] = grad
            values[layout.hessian_slice(i)] = hess
            values[layout.default_jump_index(i)] = default_jumps[i]
            values[layout.recovery_index(i)] = recovery_derivatives[i]

        return cls(layout, values)

    def gradient(self, i: int) -> FloatArray:
        """Gradient of name i w.r.t. its raw survival curve ordinates."""
        return self.values[self.layout.gradient_slice(i)]

    def hessian_packed(self, i: int) -> FloatArray:
        """Packed lower-triangular Hessian of name i."""
        return self.values[self.layout.hessian_slice(i)]

    def hessian(self, i: int) -> FloatArray:
        """Full symmetric Hessian of name i."""
        k = self.layout.curve_length(i)
        rows, cols = np.tril_indices(k)
        packed = self.hessian_packed(i)
        matrix = np.zeros((k, k))
        matrix[rows, cols] = packed
        matrix[cols, rows] = packed
        return matrix

    def default_jump(self, i: int) -> float:
        """Change in correlation on the default of name i."""
        return float(self.values[self.layout.default_jump_index(i)])

    def recovery_derivative(self, i: int) -> float:
        """Derivative w.r.t. the mean recovery rate of name i."""
        return float(self.values[self.layout.recovery_index(i)])

    def scaled(self, a: float) -> "SensitivityBlock":
        """Return a * self."""
        return SensitivityBlock(self.layout, a * self.values)

    def combine(self, a: float, other: "SensitivityBlock", b: float) -> "SensitivityBlock":
        """
        Return the elementwise linear combination a * self + b * other.

        Raises
        ------
        PreconditionViolation
            If the two blocks have different layouts
        """
        if other.layout != self.layout:
            raise PreconditionViolation(
                f"Cannot combine blocks with curve lengths "
                f"{self.layout.curve_lengths} and {other.layout.curve_lengths}"
            )
        return SensitivityBlock(self.layout, a * self.values + b * other.values)
