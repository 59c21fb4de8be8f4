"""
Excel import/export: report tables to .xlsx and bulk attendance upload
"""

import io
import logging
from typing import Any, Dict, List, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from campus_events.core.exceptions import CampusEventsError
from campus_events.models import Attendance, AttendanceStatus
from campus_events.repositories import AttendanceRepo, EventRepo, StudentRepo
from campus_events.services.validation import validate

logger = logging.getLogger(__name__)


class ExcelService:
    """Service for handling Excel operations"""

    REQUIRED_COLUMNS = ['student', 'status']
    OPTIONAL_COLUMNS = ['check in time', 'check out time', 'notes']
    MAX_ROWS = 5000

    @staticmethod
    def create_template() -> bytes:
        """Create attendance upload template with required columns"""
        df = pd.DataFrame(columns=['Student', 'Status', 'Check In Time', 'Check Out Time', 'Notes'])

        # Add sample data for guidance
        sample_data = [
            ['student1@college.edu', 'present', '2026-01-15 09:00', '2026-01-15 11:30', ''],
            ['student2@college.edu', 'late', '2026-01-15 09:20', '', 'Arrived after keynote'],
            ['student3@college.edu', 'absent', '', '', ''],
        ]

        for row in sample_data:
            df.loc[len(df)] = row

        return ExcelService.to_xlsx(df, 'Attendance')

    @staticmethod
    def to_xlsx(df: pd.DataFrame, sheet_name: str) -> bytes:
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=sheet_name[:31])
        return buffer.getvalue()

    @staticmethod
    def export_rows(rows: List[Dict[str, Any]], sheet_name: str) -> bytes:
        """Export a list of flat report rows as a single-sheet workbook"""
        df = pd.DataFrame(rows)
        df.columns = [str(col).replace('_', ' ').title() for col in df.columns]
        return ExcelService.to_xlsx(df, sheet_name)

    @staticmethod
    def column_mapping(df: pd.DataFrame) -> Dict[str, Any]:
        """Map normalized column names onto the sheet's actual headers"""
        mapping = {}
        for col in df.columns:
            col_lower = str(col).lower().strip().replace('_', ' ')
            if col_lower in ('student', 'student id', 'email', 'student email'):
                mapping['student'] = col
            elif col_lower in ExcelService.REQUIRED_COLUMNS + ExcelService.OPTIONAL_COLUMNS:
                mapping[col_lower] = col
        return mapping

    @staticmethod
    def validate_excel_structure(df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Validate Excel file structure"""
        errors = []

        mapping = ExcelService.column_mapping(df)
        missing_columns = [col for col in ExcelService.REQUIRED_COLUMNS if col not in mapping]
        if missing_columns:
            errors.append(f"Missing required columns: {', '.join(missing_columns)}")

        if len(df) > ExcelService.MAX_ROWS:
            errors.append(f"File has {len(df)} rows (max {ExcelService.MAX_ROWS})")

        return len(errors) == 0, errors

    @staticmethod
    def validate_data_constraints(df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Validate statuses and reject students listed twice"""
        errors = []
        mapping = ExcelService.column_mapping(df)

        allowed = {s.value for s in AttendanceStatus}
        statuses = df[mapping['status']].astype(str).str.lower().str.strip()
        for index, status in statuses.items():
            if status not in allowed:
                errors.append(f"Row {index + 2}: status '{status}' must be one of: {', '.join(sorted(allowed))}")

        students = df[mapping['student']].astype(str).str.strip().str.lower()
        counts = students.value_counts()
        for student, count in counts[counts > 1].items():
            errors.append(f"Student '{student}' appears {count} times")

        return len(errors) == 0, errors

    @staticmethod
    def _cell(row, mapping: Dict[str, Any], key: str):
        if key not in mapping:
            return None
        value = row[mapping[key]]
        if pd.isna(value) or str(value).strip() == '':
            return None
        if isinstance(value, pd.Timestamp):
            return value.to_pydatetime()
        return str(value).strip()

    @staticmethod
    def process_attendance_upload(
        file_content: bytes,
        event_id: str,
        db: Session
    ) -> Tuple[bool, List[str], int]:
        """Mark attendance for every row of the sheet; nothing is written when any row fails"""
        EventRepo.get_by_id(db, event_id)

        try:
            df = pd.read_excel(io.BytesIO(file_content))
        except (ValueError, KeyError, OSError) as exc:
            logger.warning("Unreadable attendance upload for event %s: %s", event_id, exc)
            return False, [f"Could not read Excel file: {exc}"], 0

        df = df.dropna(how='all')

        valid_structure, structure_errors = ExcelService.validate_excel_structure(df)
        if not valid_structure:
            return False, structure_errors, 0

        valid_data, data_errors = ExcelService.validate_data_constraints(df)
        if not valid_data:
            return False, data_errors, 0

        mapping = ExcelService.column_mapping(df)
        errors: List[str] = []
        records: List[Attendance] = []
        seen: set = set()

        for index, row in df.iterrows():
            line = index + 2
            identifier = ExcelService._cell(row, mapping, 'student')
            # Skip empty rows
            if identifier is None:
                continue

            student = (
                StudentRepo.find_by_email(db, identifier) if '@' in identifier
                else StudentRepo.find_by_id(db, identifier)
            )
            if student is None:
                errors.append(f"Row {line}: student '{identifier}' not found")
                continue
            if student.id in seen or AttendanceRepo.find_for(db, student.id, event_id):
                errors.append(f"Row {line}: attendance for '{identifier}' is already recorded")
                continue
            seen.add(student.id)

            result = validate('attendance.create', {
                'student_id': student.id,
                'event_id': event_id,
                'status': ExcelService._cell(row, mapping, 'status').lower(),
                'check_in_time': ExcelService._cell(row, mapping, 'check in time'),
                'check_out_time': ExcelService._cell(row, mapping, 'check out time'),
                'notes': ExcelService._cell(row, mapping, 'notes'),
            })
            if not result.is_valid:
                errors.extend(f"Row {line}: {e['field']}: {e['message']}" for e in result.errors)
                continue

            try:
                records.append(Attendance.create(result.value))
            except CampusEventsError as exc:
                errors.append(f"Row {line}: {exc.message}")

        if errors:
            return False, errors, 0

        AttendanceRepo.create_many(db, records)
        logger.info("Imported %d attendance records for event %s", len(records), event_id)
        return True, [], len(records)
