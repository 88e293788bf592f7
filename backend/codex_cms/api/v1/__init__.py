from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import health
from . import auth
from . import users
from . import content
from . import blocks
from . import preview
from . import forms
from . import media
from . import settings
from . import analytics
from . import public
