# services/schedule/dataclasses.py
from dataclasses import dataclass, field
from typing import Optional, List, Dict

from .parsing import grid_row, parse_start_hour, day_index

@dataclass
class SessionStudent:
    """A student row inside a session cell"""
    id: str
    name: str
    attendance: Optional[str] = None
    pending_removal: bool = False

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "attendance": self.attendance,
            "pendingRemoval": self.pending_removal,
        }

@dataclass
class SessionView:
    """Grid-ready session with its roster for one week"""
    id: str
    semester_id: str
    teacher_name: str
    day: str
    time: str
    duration: float
    specialization: Optional[str]
    type: str
    note: Optional[str]
    start_row: int
    students: List[SessionStudent] = field(default_factory=list)

    @property
    def sort_key(self):
        hour = parse_start_hour(self.time)
        return (day_index(self.day), hour if hour is not None else -1, self.time, self.id)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "day": self.day,
            "time": self.time,
            "duration": self.duration,
            "specialization": self.specialization,
            "type": self.type,
            "note": self.note,
            "startRow": self.start_row,
            "students": [s.to_dict() for s in self.students],
        }

def row_to_session_view(row) -> SessionView:
    """Convert the session columns of a joined row"""
    return SessionView(
        id=row["id"],
        semester_id=row["semester_id"],
        teacher_name=row["teacher_name"],
        day=row["day_of_week"],
        time=row["time_slot"],
        duration=float(row["duration"]),
        specialization=row["specialization"],
        type=row["type"],
        note=row["note"],
        start_row=grid_row(row["time_slot"]),
    )

def assemble_sessions(rows) -> List[SessionView]:
    """Group session/enrollment/attendance rows into one view per session.

    Rows come from a LEFT JOIN on the enrollment path, so a session without
    students still yields one row whose student columns are NULL.
    """
    sessions: Dict[str, SessionView] = {}
    seen = set()
    for row in rows:
        session = sessions.get(row["id"])
        if session is None:
            session = sessions[row["id"]] = row_to_session_view(row)

        student_id = row["student_id"]
        if student_id is None or (row["id"], student_id) in seen:
            continue
        seen.add((row["id"], student_id))
        session.students.append(SessionStudent(
            id=student_id,
            name=row["student_name"],
            attendance=row.get("attendance_status"),
            pending_removal=bool(row["pending_removal"]),
        ))

    return sorted(sessions.values(), key=lambda s: s.sort_key)

def build_master_schedule(sessions: List[SessionView]) -> Dict[str, Dict[str, List[Dict]]]:
    """teacher -> day -> sessions, derived on demand and never stored"""
    tree: Dict[str, Dict[str, List[Dict]]] = {}
    for session in sessions:
        days = tree.setdefault(session.teacher_name, {})
        view = session.to_dict()
        view.pop("day")
        days.setdefault(session.day, []).append(view)
    return tree
