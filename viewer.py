import tkinter as tk
from tkinter import filedialog, messagebox
from io import BytesIO

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from PIL import Image, ImageTk

import viewer_style as style
from errors import FilterLabError
from image_io import to_pil
from image_processing import histogram_series
from logging_config import get_logger
from pipeline import Algorithm, Pipeline, SaltPepper, Threshold
from settings import DEFAULT_NOISE_PROBABILITY, DEFAULT_SAVE_NAME, DEFAULT_THRESHOLD

logger = get_logger(__name__)

# Entries shown in the algorithm list; the two parameterised ones read their
# value from the controls under the list when applied.
ALGORITHM_CHOICES = [
    ("Sharpen", Algorithm.SHARPEN),
    ("Blur", Algorithm.BLUR),
    ("Edge Detect", Algorithm.EDGE_DETECT),
    ("Invert", Algorithm.INVERT),
    ("Mean", Algorithm.MEAN),
    ("Median", Algorithm.MEDIAN),
    ("Maximum", Algorithm.MAXIMUM),
    ("Minimum", Algorithm.MINIMUM),
    ("Grayscale", Algorithm.GRAYSCALE),
    ("Negative", Algorithm.NEGATIVE),
    ("Sobel", Algorithm.SOBEL),
    ("Laplacian", Algorithm.LAPLACIAN),
    ("Binarize", Algorithm.BINARIZE),
    ("Threshold", Threshold),
    ("Salt & Pepper Noise", SaltPepper),
    ("Zoom NN 2x", Algorithm.ZOOM_NEAREST),
    ("Zoom Bilinear 2x", Algorithm.ZOOM_BILINEAR),
    ("Pseudo Colors", Algorithm.PSEUDO_COLOR),
]


def plot_histogram_image(hists, colors, width=256, height=96):
    fig, ax = plt.subplots(figsize=(width/100, height/100), dpi=100)
    for hist, color in zip(hists, colors):
        ax.plot(range(256), hist, color=color, linewidth=0.8)
    ax.set_xlim(0, 255)
    ax.set_ylim(0, max(max(h) for h in hists)*1.1 or 1)
    ax.axis('off')
    buf = BytesIO()
    plt.savefig(buf, format='png', bbox_inches='tight', pad_inches=0)
    plt.close(fig)
    buf.seek(0)
    return Image.open(buf)


class FilterLabViewer(tk.Frame):
    def __init__(self, master, file_path=None, pipeline=None):
        super().__init__(master, bg=style.BG_MAIN)
        self.master = master
        self.pipeline = pipeline or Pipeline()
        self.pack(fill="both", expand=True)

        # === Top Toolbar ===
        toolbar = tk.Frame(self, bg=style.BG_TOOLBAR, padx=10, pady=8)
        toolbar.pack(side="top", fill="x")
        for text, command in (("Open Image", self.open_image),
                              ("Apply", self.apply_filter),
                              ("Use Output as Input", self.promote_output),
                              ("Save Output...", self.save_output)):
            tk.Button(toolbar, text=text, command=command,
                      bg=style.BG_BUTTON, fg=style.FG_BUTTON,
                      font=style.FONT_BUTTON, relief="flat",
                      padx=10, pady=4).pack(side="left", padx=5)
        self.size_label = tk.Label(toolbar, text="", bg=style.BG_TOOLBAR, fg=style.FG_BUTTON,
                                   font=style.FONT_TEXT)
        self.size_label.pack(side="right", padx=5)

        main_frame = tk.Frame(self, bg=style.BG_MAIN)
        main_frame.pack(fill="both", expand=True, padx=10, pady=10)

        # === Algorithm Panel ===
        side = tk.Frame(main_frame, bg=style.BG_PANEL, bd=2, relief="groove", padx=15, pady=15)
        side.pack(side="left", fill="y", padx=(0, 10))
        tk.Label(side, text="Filters", font=style.FONT_HEADER,
                 bg=style.BG_PANEL, fg=style.FG_TEXT).pack(anchor="w", pady=(0, 5))
        self.algo_list = tk.Listbox(side, height=len(ALGORITHM_CHOICES), exportselection=False,
                                    font=style.FONT_TEXT, activestyle="none")
        for label, _ in ALGORITHM_CHOICES:
            self.algo_list.insert("end", label)
        self.algo_list.selection_set(1)
        self.algo_list.pack(anchor="w", fill="x")

        tk.Label(side, text="Threshold level", font=style.FONT_TEXT,
                 bg=style.BG_PANEL, fg=style.FG_SUBTEXT).pack(anchor="w", pady=(10, 0))
        self.threshold_var = tk.IntVar(value=DEFAULT_THRESHOLD)
        tk.Scale(side, from_=0, to=255, orient="horizontal", variable=self.threshold_var,
                 bg=style.BG_PANEL, highlightthickness=0).pack(fill="x")

        tk.Label(side, text="Noise probability", font=style.FONT_TEXT,
                 bg=style.BG_PANEL, fg=style.FG_SUBTEXT).pack(anchor="w", pady=(10, 0))
        self.noise_var = tk.DoubleVar(value=DEFAULT_NOISE_PROBABILITY)
        tk.Scale(side, from_=0.0, to=1.0, resolution=0.01, orient="horizontal",
                 variable=self.noise_var, bg=style.BG_PANEL, highlightthickness=0).pack(fill="x")

        # === Input / Output previews ===
        previews = tk.Frame(main_frame, bg=style.BG_MAIN)
        previews.pack(side="left", fill="both", expand=True)
        self.input_canvas = self._make_preview(previews, "Input")
        self.output_canvas = self._make_preview(previews, "Output")

        self.hist_label = tk.Label(self, bg=style.BG_MAIN)
        self.hist_label.pack(side="bottom", pady=(0, 10))
        self.status = tk.Label(self, text="Open an image to start.", anchor="w",
                               bg=style.BG_MAIN, fg=style.FG_SUBTEXT, font=style.FONT_TEXT)
        self.status.pack(side="bottom", fill="x", padx=10)

        self.tk_refs = {}
        if file_path:
            self.load_image(file_path)

    def _make_preview(self, parent, title):
        frame = tk.Frame(parent, bg=style.BG_MAIN)
        frame.pack(side="left", padx=5)
        tk.Label(frame, text=title, font=style.FONT_HEADER,
                 bg=style.BG_MAIN, fg=style.FG_TEXT).pack(anchor="w")
        canvas = tk.Canvas(frame, width=style.PREVIEW_SIZE*2, height=style.PREVIEW_SIZE*2,
                           bg=style.BG_PANEL, highlightthickness=0)
        canvas.pack()
        return canvas

    # === File Handling ===
    def open_image(self):
        file_path = filedialog.askopenfilename(
            filetypes=[("Image files", "*.png;*.jpg;*.jpeg;*.bmp;*.gif;*.tiff;*.pcx")]
        )
        if file_path:
            self.load_image(file_path)

    def load_image(self, file_path):
        try:
            raster = self.pipeline.load_file(file_path)
        except FilterLabError as e:
            messagebox.showerror("Error", str(e))
            return
        self.size_label.config(text=f"{raster.width}×{raster.height} (max {self.pipeline.max_dim})")
        self.status.config(text=f"Loaded {file_path}")
        self.refresh()

    def save_output(self):
        if self.pipeline.output is None:
            messagebox.showwarning("No output", "Apply a filter first.")
            return
        save_path = filedialog.asksaveasfilename(initialdir=".", initialfile=DEFAULT_SAVE_NAME,
                                                 defaultextension=".png")
        if not save_path:
            return
        try:
            saved = self.pipeline.save(save_path)
        except FilterLabError as e:
            messagebox.showerror("Error", str(e))
            return
        self.status.config(text=f"Saved {saved}")

    # === Filtering ===
    def current_selection(self):
        sel = self.algo_list.curselection()
        _, choice = ALGORITHM_CHOICES[sel[0] if sel else 0]
        if choice is Threshold:
            return Threshold(int(self.threshold_var.get()))
        if choice is SaltPepper:
            return SaltPepper(float(self.noise_var.get()))
        return choice

    def apply_filter(self):
        if self.pipeline.input is None:
            self.status.config(text="Load an image first.")
            return
        try:
            self.pipeline.select(self.current_selection())
        except FilterLabError as e:
            messagebox.showerror("Invalid parameter", str(e))
            return
        self.config(cursor="watch")
        self.update_idletasks()
        try:
            self.pipeline.apply()
        finally:
            self.config(cursor="")
        self.refresh()

    def promote_output(self):
        if self.pipeline.output is None:
            return
        self.pipeline.promote()
        raster = self.pipeline.input
        self.size_label.config(text=f"{raster.width}×{raster.height} (max {self.pipeline.max_dim})")
        self.refresh()

    # === Display ===
    def _draw(self, canvas, key, raster):
        canvas.delete("all")
        if raster is None:
            self.tk_refs.pop(key, None)
            return
        tk_img = ImageTk.PhotoImage(to_pil(raster))
        canvas.create_image(0, 0, anchor="nw", image=tk_img)
        self.tk_refs[key] = tk_img

    def refresh(self):
        self._draw(self.input_canvas, "input", self.pipeline.input)
        self._draw(self.output_canvas, "output", self.pipeline.output)
        out = self.pipeline.output
        if out is None:
            self.hist_label.config(image="")
            self.tk_refs.pop("hist", None)
            return
        hists, colors = histogram_series(out)
        hist_img = plot_histogram_image(hists, colors, width=style.PREVIEW_SIZE*2)
        self.tk_refs["hist"] = ImageTk.PhotoImage(hist_img)
        self.hist_label.config(image=self.tk_refs["hist"])
        self.status.config(text=f"Output: {out.width}×{out.height}")
