from .auth import auth_bp
from .patient import patient_bp
from .calculator import calculator_bp
from .health import health_bp

__all__ = ['auth_bp', 'patient_bp', 'calculator_bp', 'health_bp']
