# ============================================================================
# FILE: songly/__main__.py
# Run with: python -m songly
# ============================================================================
import uvicorn
from songly.config import settings

def main():
    uvicorn.run("songly.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)

if __name__ == "__main__":
    main()
