from mediamerge.utils.logging import Logger, get_logger
from mediamerge.utils.version import get_pyproject_version

__license__ = "MIT"
__version__ = get_pyproject_version()

log: Logger = get_logger()
