from src.portfolio_api.schemas.auth import AdminIdentity, LoginRequest, LoginResponse, LoginUser
from src.portfolio_api.schemas.message import (
    ContactSubmission,
    ContactSubmissionData,
    ContactSubmissionResponse,
    MessageDeleteResponse,
    MessageDetailResponse,
    MessageListResponse,
    MessageRead,
    MessageUpdate,
    MessageUpdateResponse,
)
from src.portfolio_api.schemas.pagination import PaginationMeta
from src.portfolio_api.schemas.project import (
    ProjectDeleteResponse,
    ProjectMutationResponse,
    ProjectPayload,
    ProjectRead,
    ProjectViewResponse,
)
from src.portfolio_api.schemas.stats import (
    DashboardStats,
    DashboardStatsResponse,
    ListingStats,
    MessageStatsResponse,
    MessageStatsSummary,
    UnreadCountResponse,
)
from src.portfolio_api.schemas.upload import UploadResponse

__all__ = [
    # Auth
    "AdminIdentity",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    # Messages
    "ContactSubmission",
    "ContactSubmissionData",
    "ContactSubmissionResponse",
    "MessageDeleteResponse",
    "MessageDetailResponse",
    "MessageListResponse",
    "MessageRead",
    "MessageUpdate",
    "MessageUpdateResponse",
    # Pagination
    "PaginationMeta",
    # Projects
    "ProjectDeleteResponse",
    "ProjectMutationResponse",
    "ProjectPayload",
    "ProjectRead",
    "ProjectViewResponse",
    # Stats
    "DashboardStats",
    "DashboardStatsResponse",
    "ListingStats",
    "MessageStatsResponse",
    "MessageStatsSummary",
    "UnreadCountResponse",
    # Upload
    "UploadResponse",
]
