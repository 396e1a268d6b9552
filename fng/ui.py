import os
import sys
import tkinter as tk
from tkinter import messagebox

import ttkbootstrap as ttk
from ttkbootstrap.constants import *
from PIL import Image, ImageTk

from fng.backend import Backend
from fng.constants import APP_NAME, LOGO_FILE, STATUS_CLEAR_DELAY_MS, TEXTS
from fng.selection import BRAND, CLIENT, MATERIAL, MEDIUM, PROJECT, SIZE_HEIGHT, SIZE_UNIT, SIZE_WIDTH


class App(ttk.Window):
    """
    Main application window for the File Name Generator.

    Shows a loading screen while the spreadsheet is fetched, then the form
    whose selections are turned into a file name on every change.
    """
    def __init__(self, backend=None):
        """Initialize the window and start loading the spreadsheet data."""
        self.backend = backend or Backend()
        super().__init__(themename=self.backend.theme)
        self._suppress_events = False
        self._status_job = None
        self._logo_image = None
        self.texts = TEXTS

        self.title(self.backend.title or APP_NAME)
        self.geometry("720x820")
        self.protocol("WM_DELETE_WINDOW", self._on_app_close)

        self.grid_rowconfigure(1, weight=1)
        self.grid_columnconfigure(0, weight=1)
        self._create_header()

        self.body = ttk.Frame(self, padding="15")
        self.body.grid(row=1, column=0, sticky="nsew")
        self.body.grid_columnconfigure(0, weight=1)

        if not self.backend.access_allowed():
            self._show_message_screen(
                self.texts["access_denied_title"], self.texts["access_denied_message"], DANGER
            )
            return

        self._show_message_screen("", self.texts["loading"], INFO)
        self._start_data_load()

    # ====================== WINDOW LIFECYCLE ======================
    def _on_app_close(self):
        """Handle application closing: cleanup and destroy."""
        self.backend.shutdown()
        self.destroy()

    def _create_header(self):
        """Create the title bar with the optional logo."""
        header = ttk.Frame(self, padding="15 15 15 0")
        header.grid(row=0, column=0, sticky="ew")

        logo_path = self._resource_path(LOGO_FILE)
        if os.path.exists(logo_path):
            try:
                with Image.open(logo_path) as logo:
                    logo.thumbnail((48, 48))
                    self._logo_image = ImageTk.PhotoImage(logo)
                ttk.Label(header, image=self._logo_image).pack(side=LEFT, padx=(0, 10))
            except OSError:
                self._logo_image = None

        ttk.Label(header, text=self.texts["title"], font=("TkDefaultFont", 16, "bold")).pack(side=LEFT)

    @staticmethod
    def _resource_path(filename):
        base_path = getattr(sys, '_MEIPASS', os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        return os.path.join(base_path, filename)

    def _clear_body(self):
        for child in self.body.winfo_children():
            child.destroy()

    def _show_message_screen(self, title, message, bootstyle):
        """Replace the body with a single centred message."""
        self._clear_body()
        if title:
            ttk.Label(self.body, text=title, font=("TkDefaultFont", 13, "bold"), bootstyle=bootstyle).grid(
                row=0, column=0, pady=(40, 10)
            )
        ttk.Label(self.body, text=message, wraplength=560, justify="center", bootstyle=bootstyle).grid(
            row=1, column=0, pady=(10, 0)
        )

    # ====================== DATA LOADING ======================
    def _start_data_load(self):
        future = self.backend.load_data_async()

        def check_future():
            if future.done():
                if self.backend.apply_loaded_data(future):
                    self._create_generator()
                else:
                    self._show_message_screen(self.texts["error"], self.backend.load_error, DANGER)
            else:
                self.after(100, check_future)

        self.after(100, check_future)

    # ====================== GENERATOR FORM ======================
    def _create_generator(self):
        """Build the form, preset controls and output panel."""
        self._clear_body()
        row_index = 0

        self.combos = {}
        self.combo_vars = {}
        for field_name in (CLIENT, BRAND, PROJECT, MEDIUM, MATERIAL):
            frame = ttk.LabelFrame(self.body, text=self.texts[field_name], padding="5")
            frame.grid(row=row_index, column=0, sticky="ew", pady=(0, 3))
            frame.grid_columnconfigure(0, weight=1)
            var = tk.StringVar()
            combo = ttk.Combobox(frame, textvariable=var, state="readonly")
            combo.grid(row=0, column=0, sticky="ew")
            combo.bind("<<ComboboxSelected>>", lambda e, name=field_name: self._on_combo_selected(name))
            self.combos[field_name] = combo
            self.combo_vars[field_name] = var
            row_index += 1

        self._create_size_section(self.body, row_index)
        row_index += 1

        self.parts_frame = ttk.LabelFrame(self.body, text=self.texts["variable"], padding="5")
        self.parts_frame.grid(row=row_index, column=0, sticky="ew", pady=(0, 3))
        self.parts_frame.grid_columnconfigure(0, weight=1)
        row_index += 1

        self._create_presets_section(self.body, row_index)
        row_index += 1

        self._create_output_section(self.body, row_index)

        self.refresh_form()

    def _create_size_section(self, parent, row_idx):
        size_frame = ttk.LabelFrame(parent, text=self.texts["size"], padding="5")
        size_frame.grid(row=row_idx, column=0, sticky="ew", pady=(0, 3))

        self.size_entries = {}
        for column, field_name in enumerate((SIZE_WIDTH, SIZE_HEIGHT)):
            ttk.Label(size_frame, text=self.texts[field_name]).grid(row=0, column=column * 2, padx=(0, 5))
            entry = ttk.Entry(size_frame, width=8)
            entry.grid(row=0, column=column * 2 + 1, padx=(0, 10))
            entry.bind("<KeyRelease>", lambda e, name=field_name: self._on_size_changed(name))
            self.size_entries[field_name] = entry

        ttk.Label(size_frame, text=self.texts[SIZE_UNIT]).grid(row=0, column=4, padx=(0, 5))
        self.size_unit_var = tk.StringVar()
        unit_combo = ttk.Combobox(
            size_frame, textvariable=self.size_unit_var, values=self.backend.size_units, width=6, state="readonly"
        )
        unit_combo.grid(row=0, column=5)
        unit_combo.bind("<<ComboboxSelected>>", lambda e: self._on_field_changed(SIZE_UNIT, self.size_unit_var.get()))

    def _create_presets_section(self, parent, row_idx):
        presets_frame = ttk.LabelFrame(parent, text=self.texts["presets_title"], padding="5")
        presets_frame.grid(row=row_idx, column=0, sticky="ew", pady=(0, 3))
        presets_frame.grid_columnconfigure(0, weight=1)

        self.preset_var = tk.StringVar()
        self.preset_combo = ttk.Combobox(presets_frame, textvariable=self.preset_var, state="readonly")
        self.preset_combo.grid(row=0, column=0, sticky="ew", pady=2)
        ttk.Button(presets_frame, text=self.texts["presets_load"], command=self.ui_load_preset, bootstyle=INFO).grid(
            row=0, column=1, padx=(5, 0)
        )
        ttk.Button(
            presets_frame, text=self.texts["presets_delete"], command=self.ui_delete_preset, bootstyle=(DANGER, OUTLINE)
        ).grid(row=0, column=2, padx=(5, 0))

        self.preset_name_entry = ttk.Entry(presets_frame)
        self.preset_name_entry.grid(row=1, column=0, sticky="ew", pady=2)
        self._add_placeholder(self.preset_name_entry, self.texts["presets_save_placeholder"])
        ttk.Button(
            presets_frame, text=self.texts["presets_save_button"], command=self.ui_save_preset, bootstyle=SUCCESS
        ).grid(row=1, column=1, columnspan=2, sticky="ew", padx=(5, 0))

    def _create_output_section(self, parent, row_idx):
        output_frame = ttk.LabelFrame(parent, text=self.texts["output_title"], padding="10")
        output_frame.grid(row=row_idx, column=0, sticky="ew", pady=(10, 0))
        output_frame.grid_columnconfigure(0, weight=1)

        self.output_var = tk.StringVar(value=self.texts["output_placeholder"])
        ttk.Label(
            output_frame, textvariable=self.output_var, font=("TkFixedFont", 11, "bold"), wraplength=560
        ).grid(row=0, column=0, columnspan=3, sticky="ew")

        self.copy_button = ttk.Button(output_frame, text=self.texts["button_copy"], command=self.ui_copy_name)
        self.copy_button.grid(row=1, column=0, sticky="w", pady=(8, 0))
        ttk.Button(
            output_frame, text=self.texts["button_reset"], command=self.ui_reset, bootstyle=(SECONDARY, OUTLINE)
        ).grid(row=1, column=1, sticky="w", padx=(5, 0), pady=(8, 0))

        self.status_var = tk.StringVar()
        self.status_label = ttk.Label(output_frame, textvariable=self.status_var, bootstyle=SUCCESS)
        self.status_label.grid(
            row=1, column=2, sticky="e", pady=(8, 0)
        )

        self.warning_var = tk.StringVar()
        ttk.Label(output_frame, textvariable=self.warning_var, bootstyle=WARNING, wraplength=560).grid(
            row=2, column=0, columnspan=3, sticky="ew", pady=(5, 0)
        )

    # ====================== HELPER METHODS ======================
    def _add_placeholder(self, entry, placeholder):
        """Add placeholder text to an entry widget."""
        entry.insert(0, placeholder)
        entry.config(foreground="grey")
        entry.bind("<FocusIn>", lambda args: self._on_entry_focus_in(entry, placeholder), add='+')
        entry.bind("<FocusOut>", lambda args: self._on_entry_focus_out(entry, placeholder), add='+')

    def _on_entry_focus_in(self, entry, placeholder):
        if entry.get() == placeholder:
            entry.delete(0, tk.END)
            entry.config(foreground=self.style.lookup('TEntry', 'foreground'))

    def _on_entry_focus_out(self, entry, placeholder):
        if not entry.get():
            entry.insert(0, placeholder)
            entry.config(foreground="grey")

    def _entry_text(self, entry, placeholder):
        text = entry.get()
        return "" if text == placeholder else text

    @staticmethod
    def _set_entry(entry, value):
        entry.delete(0, tk.END)
        entry.insert(0, value)

    # ====================== REFRESH ======================
    def refresh_form(self):
        """Push the backend state into every widget."""
        self._suppress_events = True
        try:
            assembler = self.backend.assembler
            state = self.backend.state
            option_sets = {
                CLIENT: assembler.client_options,
                BRAND: assembler.brand_options,
                PROJECT: assembler.project_names,
                MEDIUM: assembler.medium_names,
                MATERIAL: assembler.material_names,
            }
            for field_name, combo in self.combos.items():
                combo.configure(values=option_sets[field_name])
                self.combo_vars[field_name].set(getattr(state, field_name))
            self.combos[BRAND].configure(state="readonly" if state.client else "disabled")
            self.combos[PROJECT].configure(state="readonly" if state.brand else "disabled")

            for field_name, entry in self.size_entries.items():
                if entry.get() != getattr(state, field_name):
                    self._set_entry(entry, getattr(state, field_name))
            self.size_unit_var.set(state.size_unit)

            self._rebuild_text_parts()
            self.preset_combo.configure(values=self.backend.get_preset_names())
        finally:
            self._suppress_events = False
        self.refresh_output()

    def _rebuild_text_parts(self):
        for child in self.parts_frame.winfo_children():
            child.destroy()

        parts = self.backend.state.custom_text_parts
        for index, value in enumerate(parts):
            entry = ttk.Entry(self.parts_frame)
            entry.grid(row=index, column=0, sticky="ew", pady=2)
            self._set_entry(entry, value)
            entry.bind("<KeyRelease>", lambda e, i=index, w=entry: self._on_text_part_changed(i, w.get()))
            if len(parts) > 1:
                ttk.Button(
                    self.parts_frame,
                    text=self.texts["remove_part"],
                    width=3,
                    command=lambda i=index: self.ui_remove_text_part(i),
                    bootstyle=(DANGER, OUTLINE),
                ).grid(row=index, column=1, padx=(5, 0))

        ttk.Button(
            self.parts_frame, text=self.texts["add_part"], width=3, command=self.ui_add_text_part, bootstyle=INFO
        ).grid(row=len(parts), column=0, sticky="w", pady=(4, 0))
        ttk.Label(self.parts_frame, text=self.texts["variable_example"], font=("TkDefaultFont", 8, "italic")).grid(
            row=len(parts) + 1, column=0, columnspan=2, sticky="w"
        )

    def refresh_output(self):
        generated = self.backend.generated
        self.output_var.set(generated.text or self.texts["output_placeholder"])
        self.copy_button.configure(state="normal" if generated.can_copy else "disabled")
        if generated.too_long:
            self.warning_var.set(
                self.texts["char_limit_warning"].format(length=generated.length, limit=generated.max_length)
            )
        else:
            self.warning_var.set("")

    def _show_status(self, message, ok=True):
        self.status_label.configure(bootstyle=SUCCESS if ok else DANGER)
        self.status_var.set(message)
        if self._status_job is not None:
            self.after_cancel(self._status_job)
        self._status_job = self.after(STATUS_CLEAR_DELAY_MS, lambda: self.status_var.set(""))

    # ====================== EVENT HANDLERS ======================
    def _on_combo_selected(self, field_name):
        self._on_field_changed(field_name, self.combo_vars[field_name].get())
        if field_name in (CLIENT, BRAND):
            self.refresh_form()

    def _on_field_changed(self, field_name, value):
        if self._suppress_events:
            return
        self.backend.set_field(field_name, value)
        self.refresh_output()

    def _on_size_changed(self, field_name):
        self._on_field_changed(field_name, self.size_entries[field_name].get())

    def _on_text_part_changed(self, index, value):
        if self._suppress_events:
            return
        self.backend.set_text_part(index, value)
        self.refresh_output()

    def ui_add_text_part(self):
        self.backend.add_text_part()
        self.refresh_form()

    def ui_remove_text_part(self, index):
        self.backend.remove_text_part(index)
        self.refresh_form()

    def ui_reset(self):
        self.backend.reset_selection()
        self.refresh_form()

    def ui_copy_name(self):
        """Copy the generated name to the clipboard."""
        ok, message = self.backend.copy_generated_name()
        self._show_status(message, ok)

    def ui_save_preset(self):
        name = self._entry_text(self.preset_name_entry, self.texts["presets_save_placeholder"])
        success, message = self.backend.save_preset(name)
        if not success:
            messagebox.showwarning(self.texts["warning"], message, parent=self)
            return
        self.preset_name_entry.delete(0, tk.END)
        self._on_entry_focus_out(self.preset_name_entry, self.texts["presets_save_placeholder"])
        self.preset_combo.configure(values=self.backend.get_preset_names())

    def ui_load_preset(self):
        if self.backend.load_preset(self.preset_var.get()):
            self.refresh_form()

    def ui_delete_preset(self):
        name = self.preset_var.get()
        if not name:
            return
        removed, _ = self.backend.delete_preset(name)
        if not removed and name in self.backend.get_preset_names():
            messagebox.showwarning(self.texts["warning"], self.texts["preset_save_failed"], parent=self)
        elif removed:
            self.preset_var.set("")
            self.preset_combo.configure(values=self.backend.get_preset_names())
