"""
Application constants
"""

# ClickUp API
CLICKUP_API_BASE_URL = "https://api.clickup.com/api/v2"
CLICKUP_PERSONAL_TOKEN_PREFIX = "pk_"
DEFAULT_TASKS_ENDPOINT = f"{CLICKUP_API_BASE_URL}/list/{{listId}}/task?include_closed=true&limit=100"

# Endpoint templates offered to the API test form
PREDEFINED_ENDPOINTS = [
    {
        "name": "Get All Tasks (All Pages)",
        "url": DEFAULT_TASKS_ENDPOINT,
        "description": "Every task of the list, following pages",
        "fetchAllPages": True,
    },
    {
        "name": "Get Tasks from List (All Status)",
        "url": DEFAULT_TASKS_ENDPOINT,
        "description": "First page of tasks in any status (max 100)",
        "fetchAllPages": False,
    },
    {
        "name": "Get Tasks from List (Open Only)",
        "url": f"{CLICKUP_API_BASE_URL}/list/{{listId}}/task",
        "description": "Open tasks of the list",
        "fetchAllPages": False,
    },
    {
        "name": "Get Space Details",
        "url": f"{CLICKUP_API_BASE_URL}/space/{{spaceId}}",
        "description": "Space information",
        "fetchAllPages": False,
    },
    {
        "name": "Get Lists in Space",
        "url": f"{CLICKUP_API_BASE_URL}/space/{{spaceId}}/list",
        "description": "All folderless lists of the space",
        "fetchAllPages": False,
    },
    {
        "name": "Get List Details",
        "url": f"{CLICKUP_API_BASE_URL}/list/{{listId}}",
        "description": "List information",
        "fetchAllPages": False,
    },
]

# Pagination
PAGE_SIZE = 100
MAX_PAGES = 10  # proxy endpoint
TASKS_ROUTE_MAX_PAGES = 50  # GET /api/clickup-tasks
PAGE_REQUEST_DELAY = 0.1  # seconds between page requests

# Identifier format for listId / spaceId
NUMERIC_ID_PATTERN = r"^\d+$"

# Settings storage
SETTINGS_STORAGE_KEY = "clickup_api_settings"
SETTINGS_EXPORT_FILENAME = "clickup_api_settings.json"

# Task statuses
STATUS_UNCHECKED = "미확인"
STATUS_CHECKING = "확인 중"
STATUS_JUDGING = "판정 중"
STATUS_DEFECT = "결함"
STATUS_NO_DEFECT = "무결함"
STATUS_REJECTED = "반려"
STATUS_COMPLETED = "완료"

STATUS_DISPLAY_ORDER = [
    STATUS_UNCHECKED,
    STATUS_CHECKING,
    STATUS_JUDGING,
    STATUS_DEFECT,
    STATUS_NO_DEFECT,
    STATUS_REJECTED,
    STATUS_COMPLETED,
]

STATUS_LABELS = {
    STATUS_UNCHECKED: "미확인",
    STATUS_CHECKING: "확인 중(문의)",
    STATUS_JUDGING: "판정 중",
    STATUS_DEFECT: "결함",
    STATUS_NO_DEFECT: "무결함",
    STATUS_REJECTED: "반려(재처리)",
    STATUS_COMPLETED: "완료",
}

STATUS_DESCRIPTIONS = {
    STATUS_UNCHECKED: "아직 확인하지 못한 접수 건들",
    STATUS_CHECKING: "접수는 했으나 요청사항에 대한 문의가 필요한 것들",
    STATUS_JUDGING: "내부 분석이 필요하여 결함 판정 중인 것들",
    STATUS_DEFECT: "결함 판정된 것들",
    STATUS_NO_DEFECT: "무결함 판정된 것들",
    STATUS_COMPLETED: "검증시험 중 처리 완료(종결과 배포까지) 된 것들",
}

STATUS_COLORS = {
    STATUS_UNCHECKED: "#FF6B6B",
    STATUS_CHECKING: "#4ECDC4",
    STATUS_JUDGING: "#45B7D1",
    STATUS_DEFECT: "#96CEB4",
    STATUS_NO_DEFECT: "#FECA57",
    STATUS_REJECTED: "#FF9FF3",
    STATUS_COMPLETED: "#54A0FF",
}
DEFAULT_STATUS_COLOR = "#74b9ff"

# Metrics
RECENT_TASK_DAYS = 7
LATEST_TASKS_LIMIT = 10
NORMAL_DEFECT_SHARE = 0.7
MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
API_KEY_VISIBLE_CHARS = 10

# Timezone
USER_TIMEZONE_OFFSET = 9  # UTC+9 (hours)
USER_TIMEZONE_STR = "+09:00"  # ISO format
