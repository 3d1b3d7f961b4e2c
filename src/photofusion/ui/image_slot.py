from __future__ import annotations

import os
from tkinter import filedialog, messagebox, ttk
from typing import Callable, Optional

from tkinterdnd2 import COPY, DND_FILES

from photofusion.core.errors import PhotoFusionError, ValidationError
from photofusion.core.models import SelectedImage
from photofusion.intake.image_intake import IntakeSource, accept_drop, accept_path, dialog_filetypes
from photofusion.ui.image_canvas import ImageCanvas


class ImageSlot(ttk.LabelFrame):
    """
    Upload panel for one input image.

    Click "Choose..." (or the preview) to pick a PNG/JPG/WEBP up to 4MB, or drop
    any image file onto the panel. The panel keeps no selection of its own: it
    reports changes through `on_change` and shows whatever `show()` is given.

    Needs a tkinterdnd2.TkinterDnD.Tk root.
    """

    def __init__(self, master, *, title: str, on_change: Callable[[Optional[SelectedImage]], None]):
        super().__init__(master, text=title, padding=8)
        self._on_change = on_change
        self._last_dir: Optional[str] = None
        self._enabled = True
        self._has_image = False

        self.canvas = ImageCanvas(self, placeholder="Click or drop to upload\nPNG, JPG, WEBP up to 4MB")
        self.canvas.pack(fill="both", expand=True)
        for widget in (self.canvas, *self.canvas.winfo_children()):
            widget.bind("<Button-1>", lambda _e: self.on_choose())
        for widget in (self, self.canvas, *self.canvas.winfo_children()):
            widget.drop_target_register(DND_FILES)
            widget.dnd_bind("<<Drop>>", self.on_drop)

        row = ttk.Frame(self)
        row.pack(side="bottom", fill="x", pady=(6, 0))

        self.meta = ttk.Label(row, text="No file selected.")
        self.meta.pack(side="left")

        self.btn_remove = ttk.Button(row, text="Remove", command=self.on_remove)
        self.btn_remove.pack(side="right")
        self.btn_choose = ttk.Button(row, text="Choose…", command=self.on_choose)
        self.btn_choose.pack(side="right", padx=(0, 6))

        self.show(None)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        self._sync_buttons()

    def show(self, image: Optional[SelectedImage]) -> None:
        self._has_image = image is not None
        if image is None:
            self.canvas.clear()
            self.meta.configure(text="No file selected.")
        else:
            self.canvas.set_data_uri(image.preview)
            self.meta.configure(text=f"{image.raw_file.name}   {image.raw_file.size / 1024:.0f} KB")
        self._sync_buttons()

    def _sync_buttons(self) -> None:
        self.btn_choose.state(["!disabled" if self._enabled else "disabled"])
        # Nothing to remove from an empty slot.
        self.btn_remove.state(["!disabled" if self._enabled and self._has_image else "disabled"])

    def on_choose(self) -> None:
        if not self._enabled:
            return
        path = filedialog.askopenfilename(
            title=f"Select {self.cget('text')}",
            filetypes=dialog_filetypes(),
            initialdir=self._last_dir,
        )
        if not path:
            return
        self._load(lambda: accept_path(path, IntakeSource.PICKER))

    def on_drop(self, event):
        if self._enabled:
            # event.data is a Tcl list; paths with spaces arrive brace-quoted.
            paths = self.tk.splitlist(event.data)
            self._load(lambda: accept_drop(paths))
        return COPY

    def _load(self, intake: Callable[[], Optional[SelectedImage]]) -> None:
        try:
            image = intake()
        except ValidationError as e:
            messagebox.showwarning("Image not accepted", str(e))
            return
        except PhotoFusionError as e:
            messagebox.showerror("Upload failed", f"Could not open image.\n\n{e}")
            return
        if image is None:
            return

        self._last_dir = os.path.dirname(image.raw_file.path) or None
        self._on_change(image)

    def on_remove(self) -> None:
        # The dialog keeps no selection, so picking the same file again works.
        self._on_change(None)
