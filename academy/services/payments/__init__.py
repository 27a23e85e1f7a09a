from academy.services.payments.service import PaymentService

__all__ = ["PaymentService"]
