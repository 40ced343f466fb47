from wishlist_relay import create_app

app = create_app()
