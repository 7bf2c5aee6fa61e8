"""Ingredient data model and (de)serialization helpers.

Defines the immutable `Ingredient` record plus JSON-compatible conversion.
Vectors are stored densely (one slot per enumeration member); the JSON form
is sparse and keyed by enumeration names.

Exports
-------
Ingredient

Notes
-----
Equality and hashing use the lowercased name, so one catalog can never
hold two ingredients that differ only by case.
"""

from constants import (
    NUM_FLAVORS,
    NUM_MEAL_POWERS,
    NUM_TYPES,
    Flavor,
    IngredientRole,
    MealPower,
    PowerType,
)


def _dense(
    sparse,
    enum_cls,
    field_name,
):
    """Expand ``{"Name": amount}`` into a tuple indexed by ``enum_cls``."""
    values = [0] * len(enum_cls)
    for key, amount in (sparse or {}).items():
        try:
            member = enum_cls[str(key).upper()]
        except KeyError:
            raise ValueError(
                f"Unknown {field_name} key: {key!r}"
            ) from None
        values[member] = int(amount)
    return tuple(values)


def _sparse(
    values,
    enum_cls,
):
    """Collapse a dense vector back into ``{"Name": amount}`` (nonzero only)."""
    return {
        enum_cls(index).name.title(): amount
        for index, amount in enumerate(values)
        if amount
    }


class Ingredient:
    """Construct an Ingredient record.

    Parameters
    ----------
    name : str
        Unique ingredient name (case-insensitive key).
    role : IngredientRole or str
        ``"filling"`` or ``"condiment"``.
    meal_power_vector : sequence of int
        Strength contribution, one entry per `MealPower`.
    type_vector : sequence of int
        Type contribution, one entry per `PowerType`.
    flavor_vector : sequence of int
        Taste contribution, one entry per `Flavor`.
    pieces : int, optional
        Pieces placed per use (fillings), by default ``1``.
    is_herba : bool, optional
        Herba mystica (special-boost condiment), by default ``False``.
    """

    __slots__ = (
        "name",
        "role",
        "meal_power_vector",
        "type_vector",
        "flavor_vector",
        "pieces",
        "is_herba",
    )

    def __init__(
        self,
        name,
        role,
        meal_power_vector,
        type_vector,
        flavor_vector,
        pieces=1,
        is_herba=False,
    ):
        self.name = name
        self.role = IngredientRole(role)
        self.meal_power_vector = tuple(int(v) for v in meal_power_vector)
        self.type_vector = tuple(int(v) for v in type_vector)
        self.flavor_vector = tuple(int(v) for v in flavor_vector)
        self.pieces = int(pieces)
        self.is_herba = bool(is_herba)

        if len(self.meal_power_vector) != NUM_MEAL_POWERS:
            raise ValueError(
                f"{name}: meal power vector needs {NUM_MEAL_POWERS} entries"
            )
        if len(self.type_vector) != NUM_TYPES:
            raise ValueError(f"{name}: type vector needs {NUM_TYPES} entries")
        if len(self.flavor_vector) != NUM_FLAVORS:
            raise ValueError(f"{name}: flavor vector needs {NUM_FLAVORS} entries")
        if self.pieces < 1:
            raise ValueError(f"{name}: pieces must be >= 1")
        if self.is_herba and self.role is not IngredientRole.CONDIMENT:
            raise ValueError(f"{name}: herba mystica must be a condiment")

    @property
    def is_filling(
        self,
    ) -> bool:
        return self.role is IngredientRole.FILLING

    @property
    def is_condiment(
        self,
    ) -> bool:
        return self.role is IngredientRole.CONDIMENT

    def __eq__(
        self,
        other,
    ):
        return (
            isinstance(
                other,
                Ingredient,
            )
            and self.name.lower() == other.name.lower()
        )

    def __hash__(
        self,
    ):
        # Same key as __eq__
        return hash(self.name.lower())

    def __str__(
        self,
    ):
        return f"{self.name} ({self.role.value})"

    def __repr__(
        self,
    ):
        return f"Ingredient({self.name!r}, {self.role.value!r})"

    @classmethod
    def from_dict(
        cls,
        data,
    ):
        """Create an ``Ingredient`` from a JSON-like dictionary.

        Parameters
        ----------
        data : dict
            Must include ``"Name"`` and ``"Role"``. Optional keys:
            ``"Pieces"``, ``"IsHerba"``, and the sparse vectors
            ``"MealPowers"``, ``"Types"``, ``"Flavors"`` keyed by
            enumeration name (case-insensitive).

        Returns
        -------
        Ingredient
            Constructed instance.

        Raises
        ------
        KeyError
            If ``"Name"`` or ``"Role"`` is missing.
        ValueError
            If a vector key or field value is invalid.
        """
        return cls(
            name=data["Name"],
            role=str(data["Role"]).lower(),
            meal_power_vector=_dense(data.get("MealPowers"), MealPower, "meal power"),
            type_vector=_dense(data.get("Types"), PowerType, "type"),
            flavor_vector=_dense(data.get("Flavors"), Flavor, "flavor"),
            pieces=data.get("Pieces", 1),
            is_herba=data.get("IsHerba", False),
        )

    def to_dict(
        self,
    ):
        """Serialize to a JSON-ready dictionary (sparse vectors)."""
        return {
            "Name": self.name,
            "Role": self.role.value,
            "Pieces": self.pieces,
            "IsHerba": self.is_herba,
            "MealPowers": _sparse(self.meal_power_vector, MealPower),
            "Types": _sparse(self.type_vector, PowerType),
            "Flavors": _sparse(self.flavor_vector, Flavor),
        }

    def debug_string(
        self,
    ):
        """Detailed vector line for logs."""
        return (
            f"{self.name} | MP:{list(self.meal_power_vector)} "
            f"T:{list(self.type_vector)} F:{list(self.flavor_vector)} "
            f"x{self.pieces}{' herba' if self.is_herba else ''}"
        )
