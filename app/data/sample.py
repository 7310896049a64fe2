"""
Built-in records served when the sheet cannot be loaded at startup.
"""
from __future__ import annotations

from app.data.schemas import Enrollment


def sample_enrollments() -> tuple[Enrollment, ...]:
    """Fresh copies of the three fallback enrollments."""
    return (
        Enrollment(
            id=1,
            student_name="John Doe",
            email="john.doe@email.com",
            course="React Development",
            category="Programming",
            enrollment_date="2024-12-15",
            status="Active",
            progress=75,
            payment_status="Paid",
            phone="+1234567890",
            address="123 Main St",
        ),
        Enrollment(
            id=2,
            student_name="Jane Smith",
            email="jane.smith@email.com",
            course="UI/UX Design",
            category="Design",
            enrollment_date="2024-12-14",
            status="Active",
            progress=60,
            payment_status="Paid",
            phone="+1234567891",
            address="456 Oak Ave",
        ),
        Enrollment(
            id=3,
            student_name="Mike Johnson",
            email="mike.johnson@email.com",
            course="Digital Marketing",
            category="Marketing",
            enrollment_date="2024-12-13",
            status="Completed",
            progress=100,
            payment_status="Paid",
            phone="+1234567892",
            address="789 Pine St",
        ),
    )
