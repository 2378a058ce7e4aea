from mangum import Mangum
from todoapi.main import create_app

app = create_app(title="User Lambda", resources=("users",))

handler = Mangum(app)
