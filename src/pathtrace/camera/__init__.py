from pathtrace.camera.camera import Camera
