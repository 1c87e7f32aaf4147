class WeightConverter:
    """Utility for converting between kg and lb."""

    KG_TO_LB = 2.20462
    UNITS = ("kg", "lb")

    @staticmethod
    def kg_to_lb(kg: float) -> float:
        return round(kg * WeightConverter.KG_TO_LB, 2)

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return round(lb / WeightConverter.KG_TO_LB, 2)

    @classmethod
    def to_kg(cls, value: float, unit: str) -> float:
        """Return ``value`` expressed in kilograms."""
        unit = unit.lower()
        if unit not in cls.UNITS:
            raise ValueError(f"unknown weight unit: {unit}")
        return float(value) if unit == "kg" else cls.lb_to_kg(value)
