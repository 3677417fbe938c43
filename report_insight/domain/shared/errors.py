"""
Domain exceptions.

Typed exceptions for explicit error handling.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain-specific exceptions inherit from this.
    Allows catching all domain errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# REPORT DOMAIN EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ReportDomainError(DomainError):
    """Base exception for report domain."""

    pass


class PdfExtractionError(ReportDomainError):
    """
    PDF text extraction failed.

    Raised when:
    - File is not a readable PDF
    - PDF has no extractable text (scanned images only)

    Example:
        >>> raise PdfExtractionError("No text found in blood_test.pdf")
    """

    pass


class ReportNotFoundError(ReportDomainError):
    """
    Report not found.

    Raised when:
    - Report ID doesn't exist
    - Report belongs to another user
    - User has not uploaded any report yet

    Example:
        >>> raise ReportNotFoundError("Report report_abc123def456 not found")
    """

    pass


class DietPlanNotFoundError(ReportDomainError):
    """
    No diet plan available.

    Raised when none of the user's reports carries a diet plan,
    or the requested report was stored without one.
    """

    pass


# ═══════════════════════════════════════════════════════════
# VALIDATION EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ValidationError(DomainError):
    """
    Input validation failed.

    Raised when:
    - Invalid input format
    - Missing required fields
    - Out of range values

    Example:
        >>> raise ValidationError("Only PDF files are accepted")
    """

    pass


# ═══════════════════════════════════════════════════════════
# EXTERNAL SERVICE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ExternalServiceError(DomainError):
    """
    External service call failed.

    Base class for all external service errors.

    Example:
        >>> raise ExternalServiceError("OpenAI API failed: timeout")
    """

    pass


class GenerationError(ExternalServiceError):
    """
    Generative text call failed or returned nothing usable.

    Example:
        >>> raise GenerationError("Empty summary returned by gpt-4o-mini")
    """

    pass


class RateLimitError(ExternalServiceError):
    """
    API rate limit exceeded.

    Example:
        >>> raise RateLimitError("OpenAI rate limit: 60 requests/minute")
    """

    pass


class ServiceUnavailableError(ExternalServiceError):
    """
    External service unavailable.

    Raised when:
    - Service down
    - Circuit breaker open

    Example:
        >>> raise ServiceUnavailableError("OpenAI circuit open")
    """

    pass


# ═══════════════════════════════════════════════════════════
# INFRASTRUCTURE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class InfrastructureError(DomainError):
    """
    Infrastructure layer error.

    Base class for database errors.
    """

    pass


class DatabaseError(InfrastructureError):
    """
    Database operation failed.

    Example:
        >>> raise DatabaseError("MongoDB connection lost")
    """

    pass
