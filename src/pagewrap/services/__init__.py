from .demo_source import DemoFoodSource, FoodPage
from .s3_source import ObjectPage, S3ObjectSource

__all__ = ["DemoFoodSource", "FoodPage", "ObjectPage", "S3ObjectSource"]
