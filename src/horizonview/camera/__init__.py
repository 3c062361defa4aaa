from horizonview.camera.frame import FrameBuilder, initial_view_inverse

__all__ = ["FrameBuilder", "initial_view_inverse"]
