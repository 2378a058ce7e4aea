from mangum import Mangum
from todoapi.main import create_app

app = create_app()

handler = Mangum(app)
