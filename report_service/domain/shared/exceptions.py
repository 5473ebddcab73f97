"""
Domain Layer Exceptions

This module defines the exception taxonomy of the report pipeline.
All domain-specific exceptions inherit from DomainException.

Responsibility:
    - Base exception class for domain errors
    - One exception per failure kind of the report pipeline
    - Type-safe error handling across layers (API maps kinds to HTTP codes)

Failure kinds:
    - InvalidPartitionKeyError: partition column missing from headers (caller error)
    - RowShapeMismatchError: row length differs from header count (caller error)
    - ArtifactGenerationFailedError: renderer failed or timed out (safe to retry)
    - StorageUnavailableError: object store upload/read failed
    - ArtifactNotFoundError: no metadata record for the requested id
    - MetadataUnavailableError: metadata repository failed
    - OrphanedArtifactError: bytes uploaded but record could not be saved
    - InvalidGenerationTransitionError: illegal ReportGeneration state change
"""


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    All report pipeline exceptions inherit from this class so the
    API Layer can register a single handler and map each subclass
    to an HTTP status code.

    Examples:
        >>> raise DomainException("Business rule violation")

        >>> try:
        ...     # domain operation
        ... except DomainException as e:
        ...     logger.error(f"Domain error: {e}")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class InvalidPartitionKeyError(DomainException):
    """
    Raised when a partitioned request cannot be split by its partition key.

    This exception is raised when:
    - The partition column name is not one of the request headers
    - A row holds a non-string value in the partition column

    Never retried: the request itself must be corrected.

    Attributes:
        partition_key: Requested partition column name
        available_headers: Headers of the request (optional)
        row_index: Zero-based index of the offending row (optional)

    Examples:
        >>> raise InvalidPartitionKeyError(
        ...     "Partition key 'country' not found in headers",
        ...     partition_key="country",
        ...     available_headers=["region", "amount"],
        ... )
    """

    def __init__(
        self,
        message: str,
        partition_key: str | None = None,
        available_headers: list[str] | None = None,
        row_index: int | None = None,
    ) -> None:
        self.partition_key = partition_key
        self.available_headers = available_headers
        self.row_index = row_index

        detailed_parts = [message]
        if available_headers is not None:
            detailed_parts.append(f"Available headers: {', '.join(available_headers)}")
        super().__init__(" | ".join(detailed_parts))


class RowShapeMismatchError(DomainException):
    """
    Raised when a data row does not have exactly one value per header.

    Attributes:
        row_index: Zero-based index of the offending row
        expected: Number of headers
        actual: Number of values in the row

    Examples:
        >>> raise RowShapeMismatchError(row_index=3, expected=2, actual=3)
    """

    def __init__(self, row_index: int, expected: int, actual: int) -> None:
        self.row_index = row_index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Row {row_index} has {actual} values, expected {expected} (one per header)"
        )


class ArtifactGenerationFailedError(DomainException):
    """
    Raised when the workbook renderer fails or exceeds its timeout.

    Raised before any storage or metadata write, so the whole
    generate call is safe to retry.

    Attributes:
        file_id: Id allocated for the failed generation
        original_error: Exception raised by the renderer (optional)
    """

    def __init__(
        self,
        message: str,
        file_id: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.file_id = file_id
        self.original_error = original_error

        detailed_parts = [message]
        if file_id:
            detailed_parts.append(f"File: {file_id}")
        if original_error:
            detailed_parts.append(
                f"Original error: {type(original_error).__name__}: {original_error}"
            )
        super().__init__(" | ".join(detailed_parts))


class StorageUnavailableError(DomainException):
    """
    Raised when the object store cannot complete an operation.

    For generate this happens after rendering succeeded and before the
    metadata record exists. For fetch it means the bytes could not be read.

    Attributes:
        file_id: Artifact id involved (optional)
        operation: Store operation that failed ("put", "get", "delete")
        original_error: Exception raised by the store (optional)
    """

    def __init__(
        self,
        message: str,
        file_id: str | None = None,
        operation: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.file_id = file_id
        self.operation = operation
        self.original_error = original_error

        detailed_parts = [message]
        if operation:
            detailed_parts.append(f"Operation: {operation}")
        if original_error:
            detailed_parts.append(
                f"Original error: {type(original_error).__name__}: {original_error}"
            )
        super().__init__(" | ".join(detailed_parts))


class ArtifactNotFoundError(DomainException):
    """
    Raised when an artifact id has no metadata record (or no stored bytes).

    Attributes:
        file_id: Requested artifact id
    """

    def __init__(self, file_id: str, message: str | None = None) -> None:
        self.file_id = file_id
        super().__init__(message or f"Artifact with ID {file_id} not found")


class MetadataUnavailableError(DomainException):
    """
    Raised when the metadata repository cannot complete an operation.

    Attributes:
        file_id: Artifact id involved (optional)
        original_error: Exception raised by the repository (optional)
    """

    def __init__(
        self,
        message: str,
        file_id: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.file_id = file_id
        self.original_error = original_error

        detailed_parts = [message]
        if original_error:
            detailed_parts.append(
                f"Original error: {type(original_error).__name__}: {original_error}"
            )
        super().__init__(" | ".join(detailed_parts))


class OrphanedArtifactError(MetadataUnavailableError):
    """
    Raised when bytes were uploaded but the metadata record could not be saved.

    The stored object stays in place without a record. It is not cleaned
    up automatically; storage_key tells an operator what to remove.

    Attributes:
        storage_key: "{container}/{key}" of the orphaned object
    """

    def __init__(
        self,
        file_id: str,
        storage_key: str,
        original_error: Exception | None = None,
    ) -> None:
        self.storage_key = storage_key
        super().__init__(
            f"Artifact bytes stored at '{storage_key}' but metadata record was not saved",
            file_id=file_id,
            original_error=original_error,
        )


class InvalidGenerationTransitionError(DomainException):
    """
    Raised when a ReportGeneration is moved to a state out of order.

    Allowed progression: ALLOCATED -> STORED -> RECORDED.

    Attributes:
        current_state: State the generation was in
        target_state: State that was requested
    """

    def __init__(self, current_state: str, target_state: str) -> None:
        self.current_state = current_state
        self.target_state = target_state
        super().__init__(
            f"Cannot move report generation from {current_state} to {target_state}"
        )
