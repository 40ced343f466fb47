import os

from wishlist_relay import create_app

if __name__ == '__main__':
    create_app().run(host='0.0.0.0', port=int(os.getenv('PORT', 3000)), debug=os.getenv('FLASK_DEBUG') == '1')
