from perceptron import Config, Walkthrough
from perceptron.log import setup_logging

if __name__ == "__main__":
    config = Config()
    setup_logging(config.log_path)
    walkthrough = Walkthrough(config)
    walkthrough.run()
    walkthrough.save_figure()
