"""
Report Insight backend.

Medical report upload, AI summaries and diet plan rendering,
organised the Clean Architecture way.

Structure:
- domain/: Business logic and domain models (diet plan segmentation lives here)
- infrastructure/: External concerns (OpenAI, PDF parsing, MongoDB)
- application/: Use cases orchestrating domain services
- api/: REST API layer
"""

__version__ = "1.0.0"
