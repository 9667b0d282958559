from dotenv import load_dotenv
import os

# Load environment variables from .env file
load_dotenv()

from comes_app import create_app

app = create_app()

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=app.config.get('APP_ENV') != 'production')
