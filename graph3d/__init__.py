"""Graph3D - 3D point set transform, projection and 2D viewing."""
