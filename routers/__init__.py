from routers import bookings, materials, orders, products, sessions, users, wishlists

# Resource name -> router, mounted according to Settings.resources
RESOURCE_ROUTERS = {
    "session": sessions.router,
    "material": materials.router,
    "booking": bookings.router,
    "product": products.router,
    "order": orders.router,
    "wishlist": wishlists.router,
}

__all__ = ["RESOURCE_ROUTERS", "users"]
