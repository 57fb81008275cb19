# FastTrack - development entry point
# Production servers import `app` from here (e.g. gunicorn run:app)

import os
from fasttrack import create_app

app = create_app(os.environ.get('FLASK_CONFIG', 'development'))


if __name__ == '__main__':
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
