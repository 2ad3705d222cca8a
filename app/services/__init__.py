"""
Domain services. Import submodules directly, e.g.
`from app.services import tenant_lifecycle`.
"""
