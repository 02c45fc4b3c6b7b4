import argparse
import tkinter as tk

from logging_config import setup_logging
from settings import LOG_LEVEL
from viewer import FilterLabViewer

class FilterLabApp(tk.Tk):
    def __init__(self, file_path=None):
        super().__init__()
        self.title("Raster Filter Lab")
        self.geometry("1200x850")
        self.viewer = FilterLabViewer(self, file_path)

        # Menu
        menubar = tk.Menu(self)
        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Open Image", command=self.viewer.open_image)
        file_menu.add_command(label="Save Output", command=self.viewer.save_output)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.quit)
        menubar.add_cascade(label="File", menu=file_menu)
        self.config(menu=menubar)

def main(argv=None):
    parser = argparse.ArgumentParser(description="Raster Filter Lab")
    parser.add_argument("image", nargs="?", help="image to open on start")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="DEBUG, INFO, WARNING, ...")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    app = FilterLabApp(args.image)
    app.mainloop()

if __name__ == "__main__":
    main()
