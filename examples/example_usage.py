"""Example: drive the service layer directly (no Flask).

Controllers are thin; the shift lifecycle and reports live in services.
"""

import tempfile

from src.site_timesheet.site_timesheet.container import build_container
from src.site_timesheet.site_timesheet.reports.model import ReportFilter


def main():
    with tempfile.TemporaryDirectory() as data_dir:
        container = build_container(backend="json", data_dir=data_dir)
        try:
            shifts = container.shift_service
            shifts.check_in(foreman_name="Majster", worker_id="1", site_id="1", work_date="2024-05-10", start_time="07:00")
            shifts.check_out(worker_id="1", work_date="2024-05-10", end_time="16:00", lunch_duration="00:30")

            report = container.report_service.build_report(ReportFilter(date_from="2024-05-01", date_to="2024-05-31"))
            for row in report.rows:
                print(row.work_date, row.worker_name, row.site_name, f"{row.hours:.2f} h")
            print("Spolu:", f"{report.total_hours:.2f} h")
        finally:
            container.close()


if __name__ == "__main__":
    main()
