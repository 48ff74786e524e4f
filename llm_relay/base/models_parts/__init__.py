"""Model parts package (one public class per module)."""

from .vendor import Vendor
from .configuration import Configuration
from .message import Message, Role
from .model_info import ModelInfo
from .prepared_request import PreparedRequest

__all__ = ["Vendor", "Configuration", "Message", "Role", "ModelInfo", "PreparedRequest"]
