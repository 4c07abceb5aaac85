"""
ClockPanel Client - Main GUI Module

Implements the main ClockPanelGUI class and launch function.

Author: ClockPanel Project
"""

import tkinter as tk
from tkinter import scrolledtext, messagebox, filedialog
import logging
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, Dict, List, Optional

from managers import ConfigManager
from models import SelectedFile, FailureKind
from operations import (
    DeviceActions,
    ACTION_UPLOAD,
    ACTION_FORMAT,
    ACTION_SET_TIME,
    ACTION_LIST_FILES,
    ACTION_PLAY_SOUND
)
from version import VERSION
from .log_handler import setup_gui_logging, cleanup_old_logs, TAG_ERROR, TAG_SUCCESS
from .settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


# Status bar text for each action
ACTION_LABELS = {
    ACTION_UPLOAD: "Upload",
    ACTION_FORMAT: "Format",
    ACTION_SET_TIME: "Set time",
    ACTION_LIST_FILES: "List files",
    ACTION_PLAY_SOUND: "Play sound"
}


class ClockPanelGUI:
    """
    Main GUI window for the ClockPanel client.

    Layout includes:
    - Device address indicator
    - Upload section (file selection, overwrite checkbox, upload button)
    - Action buttons (Format, Set Time, List Files, Play Sound)
    - Toggleable log panel
    - Status bar at bottom
    - Menu bar with Settings option

    The window is a trigger surface: DeviceActions binds its handlers
    through bind_action() and the buttons fire them.
    """

    def __init__(self):
        """Initialize the GUI window and components."""
        self.root = tk.Tk()
        self.root.title("ClockPanel - Alarm Clock Control")

        # Hide window during initialization to avoid flicker
        self.root.withdraw()

        window_width = 600
        window_height = 480
        self.root.minsize(500, 400)
        self.root.geometry(f"{window_width}x{window_height}")

        # Initialize state
        self.handlers: Dict[str, Callable] = {}
        self.selected_paths: List[str] = []
        self.log_panel_visible = False
        self.config_mgr = ConfigManager()
        self.config_mgr.load_config()
        self.api = None
        self.actions = None

        # Build GUI components
        self.create_menu_bar()
        self.create_device_indicator()
        self.create_upload_section()
        self.create_action_buttons()
        self.create_status_bar()
        self.create_log_panel()

        # Setup logging after log panel is created
        self.log_file = setup_gui_logging(self.config_mgr, self.log_message, self.root)
        cleanup_old_logs(self.config_mgr, self.log_file)

        if self.config_mgr.get("show_log_on_startup", True):
            self.toggle_log_panel()

        self.reconnect()

        # Center window on screen after all components are built
        self.root.update_idletasks()
        x = (self.root.winfo_screenwidth() - window_width) // 2
        y = (self.root.winfo_screenheight() - window_height) // 2
        self.root.geometry(f"+{x}+{y}")

        self.root.deiconify()

    def bind_action(self, name: str, handler: Callable):
        """
        Register the handler fired by an action's button.

        Args:
            name: Action name (see operations.ACTIONS)
            handler: Callable returning a Future or a list of Futures
        """
        self.handlers[name] = handler

    def reconnect(self):
        """(Re)create the API client from the current configuration and bind actions."""
        if self.api:
            self.api.close()
        self.api = self.config_mgr.create_api()
        self.actions = DeviceActions(self.api)
        self.actions.bind(self)
        self.device_label.config(text=self.api.base_url)
        logger.info(f"Device: {self.api.base_url}")

    def create_menu_bar(self):
        """Create the menu bar with Settings option."""
        menubar = tk.Menu(self.root)
        self.root.config(menu=menubar)

        file_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="File", menu=file_menu)
        file_menu.add_command(label="Settings", command=self.show_settings)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.root.quit)

        view_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="View", menu=view_menu)
        view_menu.add_command(label="Toggle Log Panel", command=self.toggle_log_panel)

        help_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Help", menu=help_menu)
        help_menu.add_command(label="About", command=self.show_about)

    def create_device_indicator(self):
        """Create the device address indicator."""
        device_frame = tk.Frame(self.root, bg="#2c3e50", pady=10)
        device_frame.pack(fill=tk.X, padx=10, pady=(10, 5))

        tk.Label(device_frame, text="Device:", font=("Arial", 11),
                 bg="#2c3e50", fg="white").pack()

        self.device_label = tk.Label(device_frame, text="",
                                     font=("Arial", 16, "bold"), bg="#2c3e50", fg="#3498db")
        self.device_label.pack()

    def create_upload_section(self):
        """Create the file upload form."""
        upload_frame = tk.LabelFrame(self.root, text="Upload Files", font=("Arial", 10, "bold"))
        upload_frame.pack(fill=tk.X, padx=10, pady=5)

        choose_button = tk.Button(upload_frame, text="Choose Files...",
                                  command=self.choose_files, font=("Arial", 10))
        choose_button.grid(row=0, column=0, padx=5, pady=5, sticky="w")

        self.selection_label = tk.Label(upload_frame, text="No files selected",
                                        font=("Arial", 9), anchor=tk.W)
        self.selection_label.grid(row=0, column=1, padx=5, pady=5, sticky="we")

        self.overwrite_var = tk.BooleanVar(value=False)
        overwrite_check = tk.Checkbutton(upload_frame, text="Overwrite existing files",
                                         variable=self.overwrite_var, font=("Arial", 9))
        overwrite_check.grid(row=1, column=0, padx=5, pady=5, sticky="w")

        self.upload_button = tk.Button(upload_frame, text="Upload",
                                       command=self.on_upload, font=("Arial", 10), width=10)
        self.upload_button.grid(row=1, column=2, padx=5, pady=5, sticky="e")

        upload_frame.columnconfigure(1, weight=1)

    def create_action_buttons(self):
        """Create the device action buttons."""
        button_frame = tk.Frame(self.root)
        button_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=5)

        button_frame.columnconfigure(0, weight=1)
        button_frame.columnconfigure(1, weight=1)
        button_frame.rowconfigure(0, weight=1)
        button_frame.rowconfigure(1, weight=1)

        button_config = {
            "font": ("Arial", 12),
            "width": 15,
            "height": 2
        }

        self.format_button = tk.Button(button_frame, text="Format Filesystem",
                                       command=self.on_format, **button_config)
        self.format_button.grid(row=0, column=0, padx=5, pady=5, sticky="nsew")

        self.time_button = tk.Button(button_frame, text="Set Time",
                                     command=lambda: self.fire(ACTION_SET_TIME), **button_config)
        self.time_button.grid(row=0, column=1, padx=5, pady=5, sticky="nsew")

        self.files_button = tk.Button(button_frame, text="List Files",
                                      command=lambda: self.fire(ACTION_LIST_FILES), **button_config)
        self.files_button.grid(row=1, column=0, padx=5, pady=5, sticky="nsew")

        self.sound_button = tk.Button(button_frame, text="Play Sound",
                                      command=lambda: self.fire(ACTION_PLAY_SOUND), **button_config)
        self.sound_button.grid(row=1, column=1, padx=5, pady=5, sticky="nsew")

    def create_log_panel(self):
        """Create the toggleable log panel (hidden until toggled)."""
        self.log_frame = tk.Frame(self.root)

        log_label = tk.Label(self.log_frame, text="Device Log:", font=("Arial", 10, "bold"))
        log_label.pack(anchor=tk.W, padx=5, pady=(5, 0))

        self.log_text = scrolledtext.ScrolledText(self.log_frame, height=10,
                                                  font=("Courier", 9),
                                                  wrap=tk.WORD, state=tk.DISABLED)
        self.log_text.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)
        self.log_text.tag_configure(TAG_ERROR, foreground="#c0392b")
        self.log_text.tag_configure(TAG_SUCCESS, foreground="#27ae60")

    def create_status_bar(self):
        """Create the status bar at the bottom."""
        status_frame = tk.Frame(self.root, bd=1, relief=tk.SUNKEN)
        status_frame.pack(side=tk.BOTTOM, fill=tk.X)

        self.status_label = tk.Label(status_frame, text="Ready",
                                     font=("Arial", 9), anchor=tk.W)
        self.status_label.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=5, pady=2)

    def update_status_bar(self, message: str):
        """
        Update the status bar with a new message.

        Args:
            message: Status message to display
        """
        self.status_label.config(text=message)

    def log_message(self, message: str, tag: Optional[str] = None):
        """
        Add a message to the log panel.

        Args:
            message: Log message to add
            tag: Optional text tag (TAG_ERROR, TAG_SUCCESS)
        """
        try:
            self.log_text.config(state=tk.NORMAL)
        except tk.TclError:
            return  # Window already destroyed
        self.log_text.insert(tk.END, message + "\n", tag or ())
        self.log_text.see(tk.END)  # Auto-scroll to bottom
        self.log_text.config(state=tk.DISABLED)

    def toggle_log_panel(self):
        """Toggle the visibility of the log panel."""
        if self.log_panel_visible:
            self.log_frame.pack_forget()
            self.log_panel_visible = False
        else:
            self.log_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=(0, 5))
            self.log_panel_visible = True

    # Action handlers

    def choose_files(self):
        """Let the user pick the files to upload."""
        paths = filedialog.askopenfilenames(parent=self.root, title="Select files to upload")
        self.selected_paths = list(paths)
        if not self.selected_paths:
            self.selection_label.config(text="No files selected")
        elif len(self.selected_paths) == 1:
            self.selection_label.config(text=Path(self.selected_paths[0]).name)
        else:
            self.selection_label.config(text=f"{len(self.selected_paths)} files selected")

    def on_upload(self):
        """Handle Upload button click."""
        try:
            selection = [SelectedFile.from_path(path) for path in self.selected_paths]
        except OSError as e:
            logger.error(f"Cannot read file to upload: {e}")
            messagebox.showerror("Upload", f"Cannot read file:\n\n{e}")
            return

        # Checkbox is read once per submission
        futures = self.fire(ACTION_UPLOAD, selection, self.overwrite_var.get())
        if futures:
            self.update_status_bar(f"Uploading {len(futures)} file(s)...")

    def on_format(self):
        """Handle Format button click."""
        if self.config_mgr.get("confirm_before_format", True):
            confirmed = messagebox.askyesno(
                "Format Filesystem",
                "This erases every file stored on the device.\n\nContinue?"
            )
            if not confirmed:
                return
        self.fire(ACTION_FORMAT)

    def fire(self, action: str, *args) -> List[Future]:
        """
        Fire a bound action and watch its requests.

        Args:
            action: Action name
            *args: Handler arguments

        Returns:
            Futures started by the action
        """
        result = self.handlers[action](*args)
        futures = result if isinstance(result, list) else [result]
        for future in futures:
            self.watch(future)
        if futures and action != ACTION_UPLOAD:
            self.update_status_bar(f"{ACTION_LABELS[action]}: request sent...")
        return futures

    def watch(self, future: Future):
        """Report a request's outcome on the tkinter thread once it settles."""
        future.add_done_callback(lambda f: self.root.after(0, lambda: self._request_complete(f)))

    def _request_complete(self, future: Future):
        """Update the GUI with a settled request."""
        error = future.exception()
        if error is not None:
            self.update_status_bar(f"Unexpected error: {error}")
            return

        result = future.result()
        label = ACTION_LABELS.get(result.action, result.action)
        if result.filename:
            label = f"{label} {result.filename}"

        if result.success:
            self.update_status_bar(f"{label}: done")
        elif result.failure == FailureKind.TRANSPORT:
            self.update_status_bar(f"{label}: device unreachable")
        elif result.failure == FailureKind.PARSE:
            self.update_status_bar(f"{label}: invalid response")
        else:
            self.update_status_bar(f"{label}: failed")

    def show_settings(self):
        """Show settings dialog."""
        SettingsDialog(self.root, self.config_mgr, gui_parent=self)

    def show_about(self):
        """Show About dialog."""
        messagebox.showinfo(
            "About ClockPanel",
            f"ClockPanel v{VERSION}\n\n"
            "Control panel for the alarm clock device: upload files, "
            "format its filesystem, set its clock, list files and play sounds."
        )

    def run(self):
        """Start the GUI main loop."""
        try:
            self.root.mainloop()
        finally:
            if self.api:
                self.api.close()


def launch_gui():
    """Launch the ClockPanel GUI application."""
    app = ClockPanelGUI()
    app.run()
