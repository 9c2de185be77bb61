from asistencia.fastapi.models.admin import Admin, AdminRole
from asistencia.fastapi.models.worker import Worker
from asistencia.fastapi.models.attendance import AttendanceRecord, AttendanceEventType
from asistencia.fastapi.models.sync_queue import PendingSync
