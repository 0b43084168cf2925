#!/usr/bin/env python3
"""
Menu Bar Application for TaskLock
Hosts the focus controller on the main run loop and exposes its controls
from a status bar item.
"""

import sys
from typing import Optional

try:
    import objc
    from AppKit import (
        NSApplication,
        NSControlStateValueOff,
        NSControlStateValueOn,
        NSMenu,
        NSMenuItem,
        NSStatusBar,
        NSVariableStatusItemLength,
    )
    from Foundation import NSObject
except ImportError:
    print(
        "Error: pyobjc-framework-Cocoa not installed. "
        "Run: pip install pyobjc-framework-Cocoa"
    )
    exit(1)

from .config import Config, get_config
from .controller import FocusController
from .logging_utils import configure_logging
from .playback import SoundEffectPlayer
from .run_loop import RunLoopScheduler
from .sound_effects import SoundEffectsLibrary
from .storage import FocusStorage
from .utils import get_data_directory, get_sound_locations

ICON_VISIBLE = "◎"
ICON_HIDDEN = "○"
ICON_PULSE = "◉"
PULSE_BLINK_DURATION = 0.42  # seconds
HIDDEN_ALPHA = 0.65

PULSE_INTERVAL_CHOICES = (
    ("Every 30 seconds", 30.0),
    ("Every minute", 60.0),
    ("Every 2 minutes", 120.0),
    ("Every 5 minutes", 300.0),
    ("Every 10 minutes", 600.0),
    ("Every 15 minutes", 900.0),
)


def format_interval(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.0f}s"
    minutes = seconds / 60
    if minutes == int(minutes):
        return f"{int(minutes)} min"
    return f"{minutes:.1f} min"


class TaskLockMenuBarDelegate(NSObject):
    def initWithController_(self, controller):
        self = objc.super(TaskLockMenuBarDelegate, self).init()
        if self is None:
            return None

        self.controller = controller
        self.is_visible = True
        self._blink_handle = None
        self.interval_items = []
        self.sound_items = []

        # Create status bar item
        self.status_bar = NSStatusBar.systemStatusBar()
        self.status_item = self.status_bar.statusItemWithLength_(
            NSVariableStatusItemLength
        )

        self.setup_menu()
        self.update_icon()
        self.refresh_menu_state()

        self._unsubscribe_pulses = controller.pulse_events.subscribe(self.handle_pulse)

        return self

    @objc.python_method
    def setup_menu(self):
        """Set up the menu bar menu."""
        self.menu = NSMenu.alloc().init()

        # Status item
        self.status_menu_item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(
            "Pulsing", None, ""
        )
        self.menu.addItem_(self.status_menu_item)
        self.menu.addItem_(NSMenuItem.separatorItem())

        # Show/Hide item
        self.toggle_item = self._add_item("Hide Note", "toggleVisibility:")
        self._add_item("Pulse Now", "pulseNow:")
        self._add_item("Preview Sound", "previewSound:")
        self.menu.addItem_(NSMenuItem.separatorItem())

        # Interval submenu
        interval_menu = NSMenu.alloc().init()
        for title, seconds in PULSE_INTERVAL_CHOICES:
            item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(
                title, "selectInterval:", ""
            )
            item.setTarget_(self)
            item.setRepresentedObject_(seconds)
            interval_menu.addItem_(item)
            self.interval_items.append((item, seconds))
        self._add_submenu("Pulse Interval", interval_menu)

        # Sound submenu
        sound_menu = NSMenu.alloc().init()
        for effect in self.controller.sound_effects:
            item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(
                effect.display_name, "selectSound:", ""
            )
            item.setTarget_(self)
            item.setRepresentedObject_(effect.id)
            sound_menu.addItem_(item)
            self.sound_items.append((item, effect.id))
        self._add_submenu("Sound", sound_menu)

        self.menu.addItem_(NSMenuItem.separatorItem())
        self._add_item("Reset to Defaults", "resetDefaults:")
        self.menu.addItem_(NSMenuItem.separatorItem())
        self._add_item("Quit", "quitApp:")

        # Set the menu
        self.status_item.setMenu_(self.menu)

    @objc.python_method
    def _add_item(self, title, action):
        item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(title, action, "")
        item.setTarget_(self)
        self.menu.addItem_(item)
        return item

    @objc.python_method
    def _add_submenu(self, title, submenu):
        parent = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(title, None, "")
        parent.setSubmenu_(submenu)
        self.menu.addItem_(parent)
        return parent

    @objc.python_method
    def update_icon(self, pulsing=False):
        """Update the menu bar icon based on note visibility."""
        button = self.status_item.button()
        if pulsing:
            button.setTitle_(ICON_PULSE)
        elif self.is_visible:
            button.setTitle_(ICON_VISIBLE)
        else:
            button.setTitle_(ICON_HIDDEN)
        button.setAlphaValue_(1.0 if self.is_visible else HIDDEN_ALPHA)

    @objc.python_method
    def refresh_menu_state(self):
        """Sync titles and check marks with the controller."""
        controller = self.controller
        if controller.is_pulse_active:
            self.status_menu_item.setTitle_(
                f"Pulsing every {format_interval(controller.pulse_interval)}"
            )
        else:
            self.status_menu_item.setTitle_("Pulses paused")
        self.toggle_item.setTitle_("Hide Note" if self.is_visible else "Show Note")

        for item, seconds in self.interval_items:
            selected = seconds == controller.pulse_interval
            item.setState_(NSControlStateValueOn if selected else NSControlStateValueOff)
        for item, effect_id in self.sound_items:
            selected = effect_id == controller.sound_effect_id
            item.setState_(NSControlStateValueOn if selected else NSControlStateValueOff)

    @objc.python_method
    def handle_pulse(self, event):
        """Blink the status item for each pulse."""
        if self._blink_handle is not None:
            self._blink_handle.cancel()
        self.update_icon(pulsing=True)
        self._blink_handle = self.controller.scheduler.call_later(
            PULSE_BLINK_DURATION, self.end_blink
        )

    @objc.python_method
    def end_blink(self):
        self._blink_handle = None
        self.update_icon()

    @objc.python_method
    def show_note(self):
        """Bring the note back and resume pulses."""
        self.is_visible = True
        self.controller.begin_editing()
        self.controller.set_pulse_active(True)
        self.update_icon()
        self.refresh_menu_state()

    @objc.python_method
    def hide_note(self):
        """Hide the note, saving pending edits and pausing pulses."""
        self.is_visible = False
        self.controller.commit_editing()
        self.controller.flush_pending_window_position_save()
        self.controller.set_pulse_active(False)
        self.update_icon()
        self.refresh_menu_state()

    @objc.IBAction
    def toggleVisibility_(self, sender):
        if self.is_visible:
            self.hide_note()
        else:
            self.show_note()

    @objc.IBAction
    def pulseNow_(self, sender):
        self.controller.trigger_pulse()

    @objc.IBAction
    def previewSound_(self, sender):
        self.controller.preview_selected_sound()

    @objc.IBAction
    def selectInterval_(self, sender):
        self.controller.set_pulse_interval(float(sender.representedObject()))
        self.refresh_menu_state()

    @objc.IBAction
    def selectSound_(self, sender):
        self.controller.set_sound_effect_id(str(sender.representedObject()))
        self.controller.preview_selected_sound()
        self.refresh_menu_state()

    @objc.IBAction
    def resetDefaults_(self, sender):
        self.controller.reset_defaults()
        self.refresh_menu_state()

    @objc.IBAction
    def quitApp_(self, sender):
        """Quit the application."""
        self.controller.shutdown()
        NSApplication.sharedApplication().terminate_(None)


def build_controller(config: Config) -> FocusController:
    """Wire storage, sounds, playback and run loop timers into a controller."""
    data_dir = get_data_directory(config)
    library = SoundEffectsLibrary.from_locations(
        get_sound_locations(config), config.default_sound_effect_id
    )
    return FocusController(
        storage=FocusStorage(str(data_dir)),
        scheduler=RunLoopScheduler(),
        library=library,
        player=SoundEffectPlayer(library),
        verbose=config.verbose_logging,
        focus_text_debounce=config.focus_text_debounce,
        window_position_debounce=config.window_position_debounce,
        window_height_settle=config.window_height_settle,
        startup_grace_period=config.startup_grace_period,
    )


class MenuBarApp:
    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()
        configure_logging(self.config.log_level, get_data_directory(self.config) / "logs")
        self.app = NSApplication.sharedApplication()
        self.controller = build_controller(self.config)
        self.delegate = TaskLockMenuBarDelegate.alloc().initWithController_(
            self.controller
        )

        # Set up the app
        self.app.setActivationPolicy_(2)  # NSApplicationActivationPolicyAccessory

    def run(self):
        """Run the menu bar application."""
        self.controller.start()
        self.delegate.refresh_menu_state()

        try:
            self.app.run()
        except KeyboardInterrupt:
            print("\nShutting down...")
            self.controller.shutdown()


def main(config: Optional[Config] = None):
    """Main entry point."""
    try:
        app = MenuBarApp(config)
        app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user. Shutting down...")
        sys.exit(0)
    except Exception as e:
        print(f"Error starting application: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
