"""Run a development server for the Movie World backend."""
import uvicorn

from movieworld.main import create_app


def main() -> None:
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
