from __future__ import annotations

import io
import tkinter as tk
from tkinter import ttk
from typing import Optional, Tuple

from PIL import Image, ImageTk

from photofusion.core.datauri import decode_data_uri


def data_uri_to_pil(uri: str) -> Image.Image:
    """Decode a base64 image data URI into a loaded PIL image."""
    _, data = decode_data_uri(uri)
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


class ImageCanvas(ttk.Frame):
    """A resizable canvas that shows a data URI image scaled to fit, or a placeholder message."""

    def __init__(self, master, *, placeholder: str = "No image loaded", bg: str = "#f3f3f3"):
        super().__init__(master)
        self._canvas = tk.Canvas(self, highlightthickness=0, bg=bg)
        self._canvas.pack(fill="both", expand=True)

        self._photo: Optional[ImageTk.PhotoImage] = None
        self._pil: Optional[Image.Image] = None
        self._placeholder = placeholder

        self._canvas.bind("<Configure>", self._on_resize)

        self._text_id = self._canvas.create_text(
            0, 0, anchor="center",
            text=placeholder,
            fill="#555",
            font=("TkDefaultFont", 11),
            justify="center",
        )

    def set_data_uri(self, uri: Optional[str]) -> None:
        """Show the image in `uri`; an undecodable URI shows a message instead of raising."""
        if uri is None:
            self.clear()
            return
        try:
            pil = data_uri_to_pil(uri)
        except (ValueError, OSError):
            self.show_message("Preview unavailable")
            return
        self._pil = pil
        self._redraw()

    def show_message(self, text: str) -> None:
        self._pil = None
        self._canvas.itemconfigure(self._text_id, text=text)
        self._redraw()

    def clear(self) -> None:
        self.show_message(self._placeholder)

    def _on_resize(self, _evt) -> None:
        self._redraw()

    def _fit_size(self, img_w: int, img_h: int, box_w: int, box_h: int) -> Tuple[int, int]:
        if img_w <= 0 or img_h <= 0 or box_w <= 2 or box_h <= 2:
            return (1, 1)
        scale = min(box_w / img_w, box_h / img_h)
        return max(1, int(img_w * scale)), max(1, int(img_h * scale))

    def _redraw(self) -> None:
        self._canvas.delete("img")
        w = max(1, self._canvas.winfo_width())
        h = max(1, self._canvas.winfo_height())

        if self._pil is None:
            self._canvas.coords(self._text_id, w // 2, h // 2)
            self._canvas.itemconfigure(self._text_id, state="normal")
            return

        self._canvas.itemconfigure(self._text_id, state="hidden")

        new_w, new_h = self._fit_size(self._pil.width, self._pil.height, w, h)
        resized = self._pil.resize((new_w, new_h), Image.LANCZOS)

        self._photo = ImageTk.PhotoImage(resized)
        self._canvas.create_image((w - new_w) // 2, (h - new_h) // 2, anchor="nw", image=self._photo, tags=("img",))
