from .department_registry import DEPARTMENTS, Department, DepartmentRegistry
from .schedule import ExamSchedule
from .schemas import FacultyGroup, Stats, TestRecord

departments = DEPARTMENTS
