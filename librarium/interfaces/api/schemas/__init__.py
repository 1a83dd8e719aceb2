from .activity import ActivityLogRead
from .auth import RegisterRequest, Token
from .book import BookAvailabilityRead, BookCreate, BookListResponse, BookRead
from .health import HealthRead
from .notification import (
    NotificationListResponse,
    NotificationRead,
    NotificationUpdate,
    SuccessResponse,
)
from .reservation import ReservationCreate, ReservationListResponse, ReservationRead
from .review import (
    RatingStatsRead,
    ReviewCreate,
    ReviewListResponse,
    ReviewPagination,
    ReviewRead,
    ReviewUpdate,
)
from .transaction import (
    BookCopyRead,
    BorrowedBookRead,
    FineDetailRead,
    FineRead,
    FineStatsRead,
    FineStatusTotalsRead,
    FineTransactionRead,
    IssueBookRequest,
    LoanBookRead,
    LoanMemberRead,
    MemberFineRead,
    MemberFineSummaryRead,
    MemberFinesResponse,
    OverdueReminderResponse,
    OverdueTransactionRead,
    RenewLoanRequest,
    RenewLoanResponse,
    ReturnBookRequest,
    ReturnBookResponse,
    TransactionRead,
)
from .user import RoleRead, UserRead

__all__ = [
    "ActivityLogRead",
    "BookAvailabilityRead",
    "BookCopyRead",
    "BookCreate",
    "BookListResponse",
    "BookRead",
    "BorrowedBookRead",
    "FineDetailRead",
    "FineRead",
    "FineStatsRead",
    "FineStatusTotalsRead",
    "FineTransactionRead",
    "HealthRead",
    "IssueBookRequest",
    "LoanBookRead",
    "LoanMemberRead",
    "MemberFineRead",
    "MemberFineSummaryRead",
    "MemberFinesResponse",
    "NotificationListResponse",
    "NotificationRead",
    "NotificationUpdate",
    "OverdueReminderResponse",
    "OverdueTransactionRead",
    "RatingStatsRead",
    "RegisterRequest",
    "RenewLoanRequest",
    "RenewLoanResponse",
    "ReservationCreate",
    "ReservationListResponse",
    "ReservationRead",
    "ReturnBookRequest",
    "ReturnBookResponse",
    "ReviewCreate",
    "ReviewListResponse",
    "ReviewPagination",
    "ReviewRead",
    "ReviewUpdate",
    "RoleRead",
    "Token",
    "TransactionRead",
    "UserRead",
]
