from .department_source import DepartmentPageSource
from .extractor import ExamPageExtractor, decode_payload, extract_groups
from .http_client import HttpClient
