from .points_policy import PointsPolicy as PointsPolicy
