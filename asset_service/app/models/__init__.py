# Import all models to ensure they are registered with SQLAlchemy
from .products.products import Product
from .products.product_commissioning import ProductCommissioning
from .products.product_maintenance import ProductMaintenance
from .products.maintenance_windows import MaintenanceWindow
from .common.stored_files import StoredFile
from .common.activity_history import ActivityHistory
