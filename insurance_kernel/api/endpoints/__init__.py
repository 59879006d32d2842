"""HTTP endpoint routers."""
