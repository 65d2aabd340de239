from notary_fees.services.fee_type.fee_type_service import FeeTypeService

__all__ = ["FeeTypeService"]
