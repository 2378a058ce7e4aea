from mangum import Mangum
from todoapi.main import create_app

app = create_app(title="Todo Lambda", resources=("todos",))

handler = Mangum(app)
