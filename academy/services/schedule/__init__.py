from academy.services.schedule.service import ScheduleService

__all__ = ["ScheduleService"]
