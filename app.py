#!/usr/bin/env python
"""Main entry point for the File Name Generator."""

import logging
import sys
import tkinter as tk
from tkinter import messagebox

from fng.backend import Backend
from fng.config import load_main_config, setup_logging
from fng.ui import App

logger = logging.getLogger(__name__)


def main():
    try:
        setup_logging(load_main_config().get("log_level", "INFO"))
        backend = Backend()
        app = App(backend)
        app.mainloop()
    except Exception as e:
        # Catch-all for unexpected errors during App init itself
        logger.exception("Application failed to initialize")
        try:
            root = tk.Tk()
            root.withdraw()
            messagebox.showerror("Critical Startup Error", f"Application failed to initialize:\n{e}")
            root.destroy()
        except tk.TclError:
            pass
        sys.exit(1)


if __name__ == "__main__":
    main()
