from contextlib import contextmanager

import polyscope.imgui as psim


@contextmanager
def ui_tree_node(label: str, open_first_time: bool = False):
    if open_first_time:
        psim.SetNextItemOpen(True, psim.ImGuiCond_FirstUseEver)
    expanded = psim.TreeNode(label)
    try:
        yield expanded
    finally:
        if expanded:
            psim.TreePop()


@contextmanager
def ui_item_width(width: float):
    psim.PushItemWidth(width)
    try:
        yield
    finally:
        psim.PopItemWidth()


@contextmanager
def ui_combo(label: str, preview: str):
    expanded = psim.BeginCombo(label, preview)
    try:
        yield expanded
    finally:
        if expanded:
            psim.EndCombo()
