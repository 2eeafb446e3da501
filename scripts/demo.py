"""
Interactive demo: the field of view follows the mouse over a random maze.

Usage: python scripts/demo.py [--width W] [--height H] [--radius R] [--seed S]
"""
import argparse

import matplotlib.pyplot as plt

from grid_fov import Grid, generate_maze


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--width", type=int, default=200)
    parser.add_argument("--height", type=int, default=150)
    parser.add_argument("--radius", type=int, default=60)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--dark-walls", action="store_true")
    parser.add_argument("--no-attenuation", action="store_true")
    args = parser.parse_args()

    grid = Grid(opaque=generate_maze(args.width, args.height, seed=args.seed))
    flags = dict(dark_walls=args.dark_walls, skip_attenuation=args.no_attenuation)
    lightmap = grid.new_lightmap()
    origin = (grid.width // 2, grid.height // 2)
    grid.fov(origin, args.radius, lightmap, **flags)

    fig, ax = plt.subplots()
    grid.plot(lightmap, ax=ax, show=False)
    image = ax.get_images()[0]
    ax.set_title("Grid Field of View")

    def on_move(event):
        if event.inaxes is not ax or event.xdata is None:
            return
        cell = (int(round(event.xdata)), int(round(event.ydata)))
        grid.fov(cell, args.radius, lightmap, **flags)
        image.set_data(lightmap)
        fig.canvas.draw_idle()

    fig.canvas.mpl_connect("motion_notify_event", on_move)
    plt.show()


if __name__ == "__main__":
    main()
