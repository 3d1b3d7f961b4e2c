from __future__ import annotations

import os
import sys
import threading
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from typing import Dict, Optional

from tkinterdnd2 import TkinterDnD

from photofusion.app.controller import PendingSubmission, SessionController
from photofusion.app.export import DEFAULT_DOWNLOAD_NAME, save_result
from photofusion.app.logging_config import configure_logging
from photofusion.core.errors import MissingCredentialError
from photofusion.core.models import Failed, Idle, Loading, SelectedImage, Slot, Succeeded, WorkflowState
from photofusion.remote.config import load_service_config
from photofusion.remote.edit_client import EditRequestClient
from photofusion.ui.image_canvas import ImageCanvas
from photofusion.ui.image_slot import ImageSlot

SLOT_TITLES = {
    Slot.BASE: "1. Base Image",
    Slot.LOGO: "2. Logo/Overlay",
}


class PhotoFusionApp(ttk.Frame):
    """Photo Fusion window: two image slots, an instruction box, and the generated result."""

    def __init__(self, master: tk.Tk, controller: SessionController):
        super().__init__(master)
        self.master = master
        self.controller = controller
        self.slots: Dict[Slot, ImageSlot] = {}

        self._build_style()
        self._build_layout()
        self._bind_shortcuts()

        self.controller.add_listener(self._render_workflow)
        self._render_workflow(self.controller.workflow)
        self.set_status("Ready.")

    # ---------- UI construction ----------

    def _build_style(self) -> None:
        style = ttk.Style(self.master)
        if "clam" in style.theme_names():
            style.theme_use("clam")
        style.configure("Error.TLabel", foreground="#b91c1c")
        style.configure("ErrorTitle.TLabel", foreground="#b91c1c", font=("TkDefaultFont", 11, "bold"))

    def _build_layout(self) -> None:
        self.pack(fill="both", expand=True)

        main = ttk.PanedWindow(self, orient="horizontal")
        main.pack(side="top", fill="both", expand=True, padx=10, pady=10)

        # Left pane: inputs
        left = ttk.Frame(main, padding=(0, 0, 8, 0))
        main.add(left, weight=1)

        slots_row = ttk.Frame(left)
        slots_row.pack(side="top", fill="both", expand=True)
        for col, slot in enumerate(Slot):
            panel = ImageSlot(
                slots_row,
                title=SLOT_TITLES[slot],
                on_change=lambda image, slot=slot: self.on_image_changed(slot, image),
            )
            panel.grid(row=0, column=col, sticky="nsew", padx=(0 if col == 0 else 6, 0))
            slots_row.columnconfigure(col, weight=1, uniform="slots")
            self.slots[slot] = panel
        slots_row.rowconfigure(0, weight=1)

        lf_prompt = ttk.LabelFrame(left, text="3. Describe Your Edit", padding=8)
        lf_prompt.pack(side="top", fill="x", pady=(10, 0))

        self.txt_instruction = tk.Text(lf_prompt, height=6, wrap="word")
        self.txt_instruction.pack(fill="x")
        self.txt_instruction.insert("1.0", self.controller.state.instruction)
        self.txt_instruction.bind("<<Modified>>", self._on_instruction_modified)

        self.btn_generate = ttk.Button(left, text="Generate Image", command=self.on_generate)
        self.btn_generate.pack(side="top", fill="x", pady=(10, 0))

        # Right pane: result
        right = ttk.LabelFrame(main, text="Result", padding=8)
        main.add(right, weight=1)

        self.result_canvas = ImageCanvas(right, placeholder="Your generated image will appear here")
        self.result_canvas.pack(side="top", fill="both", expand=True)

        self.progress = ttk.Progressbar(right, mode="indeterminate")

        self.error_panel = ttk.Frame(right, padding=8)
        ttk.Label(self.error_panel, text="An error occurred", style="ErrorTitle.TLabel").pack(anchor="w")
        self.error_text = ttk.Label(self.error_panel, text="", style="Error.TLabel", wraplength=420)
        self.error_text.pack(anchor="w", pady=(4, 0))

        result_row = ttk.Frame(right)
        result_row.pack(side="bottom", fill="x", pady=(8, 0))
        self.btn_download = ttk.Button(result_row, text="Download", command=self.on_download)
        self.btn_download.pack(side="right")

        # Status bar
        status = ttk.Frame(self, padding=(10, 6))
        status.pack(side="bottom", fill="x")
        self.status_var = tk.StringVar(value="Ready.")
        ttk.Label(status, textvariable=self.status_var).pack(side="left")

    def _bind_shortcuts(self) -> None:
        self.master.bind_all("<Control-Return>", lambda e: self.on_generate())
        self.master.bind_all("<Command-Return>", lambda e: self.on_generate())
        self.master.bind_all("<Control-s>", lambda e: self.on_download())
        self.master.bind_all("<Command-s>", lambda e: self.on_download())

    # ---------- Utilities ----------

    def set_status(self, text: str) -> None:
        self.status_var.set(text)

    def _refresh_controls(self) -> None:
        loading = self.controller.is_loading
        for panel in self.slots.values():
            panel.set_enabled(not loading)
        self.txt_instruction.configure(state="disabled" if loading else "normal")

        if self.controller.can_submit():
            self.btn_generate.state(["!disabled"])
        else:
            self.btn_generate.state(["disabled"])

        if isinstance(self.controller.workflow, Succeeded):
            self.btn_download.state(["!disabled"])
        else:
            self.btn_download.state(["disabled"])

    def _render_workflow(self, workflow: WorkflowState) -> None:
        self.progress.stop()
        self.progress.pack_forget()
        self.error_panel.pack_forget()

        if isinstance(workflow, Loading):
            self.result_canvas.show_message("AI is crafting your image...\nThis may take a moment.")
            self.progress.pack(side="top", fill="x", pady=(8, 0))
            self.progress.start(12)
            self.btn_generate.configure(text="Generating...")
            self.set_status("Generating…")
        else:
            self.btn_generate.configure(text="Generate Image")

        if isinstance(workflow, Idle):
            self.result_canvas.clear()
        elif isinstance(workflow, Succeeded):
            self.result_canvas.set_data_uri(workflow.image_data_uri)
            self.set_status("Image generated.")
        elif isinstance(workflow, Failed):
            self.result_canvas.show_message("")
            self.error_text.configure(text=workflow.message)
            self.error_panel.pack(side="top", fill="x", pady=(8, 0))
            self.set_status("Generation failed.")

        self._refresh_controls()

    # ---------- Inputs ----------

    def on_image_changed(self, slot: Slot, image: Optional[SelectedImage]) -> None:
        if image is None:
            self.controller.remove_image(slot)
            self.set_status(f"Removed {SLOT_TITLES[slot]}.")
        else:
            self.controller.select_image(slot, image)
            self.set_status(f"Loaded {image.raw_file.name}.")
        self.slots[slot].show(image)
        self._refresh_controls()

    def _on_instruction_modified(self, _evt=None) -> None:
        if not self.txt_instruction.edit_modified():
            return
        self.controller.set_instruction(self.txt_instruction.get("1.0", "end-1c"))
        self.txt_instruction.edit_modified(False)
        self._refresh_controls()

    # ---------- Generate ----------

    def on_generate(self) -> None:
        self.controller.set_instruction(self.txt_instruction.get("1.0", "end-1c"))
        pending = self.controller.begin_submission()
        if pending is None:
            return

        def worker(job: PendingSubmission) -> None:
            outcome = self.controller.execute(job)
            self.master.after(0, lambda: self.controller.complete(outcome))

        threading.Thread(target=worker, args=(pending,), daemon=True).start()

    # ---------- Download ----------

    def on_download(self) -> None:
        workflow = self.controller.workflow
        if not isinstance(workflow, Succeeded):
            return

        path = filedialog.asksaveasfilename(
            title="Save generated image",
            initialfile=DEFAULT_DOWNLOAD_NAME,
            defaultextension=".png",
            filetypes=[("PNG image", "*.png"), ("All files", "*.*")],
        )
        if not path:
            return

        try:
            save_result(workflow.image_data_uri, path)
        except (OSError, ValueError) as e:
            messagebox.showerror("Save failed", f"Could not save image.\n\n{e}")
            self.set_status("Save failed.")
            return
        self.set_status(f"Saved {os.path.basename(path)}.")


def run() -> None:
    configure_logging()
    try:
        config = load_service_config()
    except MissingCredentialError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        raise SystemExit(2)

    controller = SessionController(EditRequestClient.from_config(config))

    # TkinterDnD.Tk loads the tkdnd extension the image slots register drop targets with.
    root = TkinterDnD.Tk()
    root.title("Photo Fusion AI")
    root.geometry("1100x700")
    root.minsize(900, 600)

    PhotoFusionApp(root, controller)

    root.mainloop()
