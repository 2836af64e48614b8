"""Input Ports - Interfaces dos casos de uso expostos ao handler HTTP"""

from .generate_description_port import IGenerateDescriptionUseCase
from .unsubscribe_lead_port import IUnsubscribeLeadUseCase
from .check_health_port import ICheckHealthUseCase
