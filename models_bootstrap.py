# models_bootstrap.py
from tenant import models as _tenant_models
from role import models as _role_models
from member import models as _member_models
from template import models as _template_models
from businessday import models as _businessday_models
from attendance import models as _attendance_models
from adjustment import models as _adjustment_models
from announcement import models as _announcement_models
