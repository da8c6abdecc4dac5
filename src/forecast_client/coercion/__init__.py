from .numeric import is_finite_number, to_number_optional, to_number_or_zero, to_number_required

__all__ = ["is_finite_number", "to_number_optional", "to_number_or_zero", "to_number_required"]
