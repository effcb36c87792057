import numpy as np, cv2
from typer.testing import CliRunner
from mlswarp.cli import app
from mlswarp.io.image import read_image, write_image, draw_controls

runner = CliRunner()

def _image(tmp_path):
    img = np.zeros((40,50,3), np.uint8)
    cv2.rectangle(img, (10,10), (30,25), (255,128,0), -1)
    path = tmp_path/"in.png"
    write_image(path, img)
    return path, img

def test_warp_command(tmp_path):
    src, img = _image(tmp_path)
    out = tmp_path/"out.png"
    res = runner.invoke(app, ["warp", str(src), str(out), "-p", "10,10:12,10", "-p", "30,25:30,28",
                              "-p", "40,5:40,5", "--kind", "similarity"])
    assert res.exit_code == 0, res.output
    assert read_image(out).shape == img.shape

def test_warp_sparse_with_config(tmp_path):
    src, img = _image(tmp_path)
    cfg = tmp_path/"warp.yaml"; cfg.write_text("border: fill\nparallel: true\nband_budget: 256\n")
    out = tmp_path/"out.png"
    res = runner.invoke(app, ["warp", str(src), str(out), "-p", "0,0:3,2", "--sparse", "4",
                              "--config", str(cfg), "--show-controls"])
    assert res.exit_code == 0, res.output
    warped = read_image(out)
    assert warped.shape == img.shape
    assert (warped[20,40] == 0).all()

def test_point_command():
    res = runner.invoke(app, ["point", "1", "1", "-p", "0,0:5,5", "--kind", "affine"])
    assert res.exit_code == 0
    assert res.output.strip() == "6 6"

def test_cli_errors(tmp_path):
    src, _ = _image(tmp_path)
    res = runner.invoke(app, ["warp", str(src), str(tmp_path/"o.png"), "-p", "1,2-3,4"])
    assert res.exit_code == 1
    res = runner.invoke(app, ["point", "1", "1", "-p", "0,0:5,5", "--kind", "twist"])
    assert res.exit_code == 1
    res = runner.invoke(app, ["warp", str(tmp_path/"missing.png"), str(tmp_path/"o.png"), "-p", "0,0:1,1"])
    assert res.exit_code == 1

def test_draw_controls():
    img = np.zeros((20,20), np.uint8)
    dbg = draw_controls(img, [(10,10)], radius=3, color=(0,0,255))
    assert dbg.shape == (20,20,3) and tuple(dbg[10,10]) == (0,0,255)
    assert img.max() == 0

def test_config_errors(tmp_path):
    src, _ = _image(tmp_path)
    out = tmp_path/"o.png"
    res = runner.invoke(app, ["warp", str(src), str(out), "-p", "0,0:1,1", "--config", str(tmp_path/"nope.yaml")])
    assert res.exit_code == 1 and "Error" in res.output
    bad = tmp_path/"bad.yaml"; bad.write_text("alpha: [1, 2\n")
    res = runner.invoke(app, ["warp", str(src), str(out), "-p", "0,0:1,1", "--config", str(bad)])
    assert res.exit_code == 1 and "Error" in res.output
    assert not out.exists()
