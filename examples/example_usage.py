"""Example: use the repository and services directly (without Flask).

Controllers are a thin layer; every operation is available on the container.
"""

from attendance_tracker.container import build_container
from attendance_tracker.core.enums import ExportKind
from attendance_tracker.storage.memory_store import InMemoryStore


def main():
    container = build_container(store=InMemoryStore())
    repo = container.repository

    ada = repo.add_employee(
        name="Ada", employee_id="E1", department="Engineering", position="Senior", join_date="2024-01-01"
    )
    repo.add_or_update_attendance(employee_id=ada.id, date="2024-03-01", status="present")
    repo.add_or_update_attendance(employee_id=ada.id, date="2024-03-01", status="late", notes="traffic")

    print(container.report_service.daily_stats("2024-03-01"))
    print(container.report_service.windowed_summary(ada.id, "2024-03-01", "2024-03-31"))
    print(container.transfer_service.render_csv(ExportKind.ATTENDANCE))


if __name__ == "__main__":
    main()
