import uvicorn
from vinheria.core.config import settings


def main():
    uvicorn.run("vinheria.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
