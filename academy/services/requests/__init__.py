from academy.services.requests.service import RequestService

__all__ = ["RequestService"]
