"""
Service layer.

Services return ServiceResult objects; the pure engine underneath
(``fee_calculation.calculator``, ``formula``) raises typed exceptions.
"""
