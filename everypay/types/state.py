"""Payment outcome definitions and the transaction result lookup table."""

from enum import Enum, IntEnum


class StatusCode(IntEnum):
    """Verified payment outcome returned to the integrator (numbers fixed by protocol)"""
    SUCCESS = 1      # Payment completed
    CANCELLED = 2    # Payment cancelled by the customer
    FAILED = 3       # Payment failed


class TransactionResult(str, Enum):
    """transaction_result values reported by the gateway"""
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


STATUS_BY_RESULT = {
    TransactionResult.COMPLETED.value: StatusCode.SUCCESS,
    TransactionResult.CANCELLED.value: StatusCode.CANCELLED,
    TransactionResult.FAILED.value: StatusCode.FAILED,
}
