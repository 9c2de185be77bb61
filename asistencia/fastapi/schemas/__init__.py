from asistencia.fastapi.schemas.admin import (
    AdminBase,
    AdminCreate,
    AdminRead,
    AdminUpdate,
    AuditLogEntry
)
from asistencia.fastapi.schemas.worker import (
    WorkerBase,
    WorkerCreate,
    WorkerUpdate,
    WorkerPinUpdate,
    WorkerRead,
    WorkerRosterEntry,
    WorkerCreateResponse,
    WorkerListResponse
)
from asistencia.fastapi.schemas.auth import (
    WorkerLogin,
    AdminLogin,
    AuthSessionRead,
    TokenResponse,
    LogoutResponse
)
from asistencia.fastapi.schemas.attendance import (
    AttendanceRecordRead,
    AttendanceRecordCreate,
    AttendanceRecordUpdate,
    AttendanceRecordExport,
    AttendanceRecordListResponse,
    PunchRequest,
    PunchResponse,
    WorkerStatusResponse,
    ImportResult
)
from asistencia.fastapi.schemas.report import (
    DailyReport,
    SunafilReport,
    TodayStats,
    MonthlyStats,
    RecordStatistics,
    DashboardResponse,
    DailyReportResponse,
    SunafilReportResponse
)
from asistencia.fastapi.schemas.sync import (
    SyncRecord,
    SyncResult,
    GoogleHealth,
    RetryResult,
    SyncStatusResponse
)
